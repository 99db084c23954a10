"""Autofill services: text helpers, formatters, rules, navigation and orchestration."""
