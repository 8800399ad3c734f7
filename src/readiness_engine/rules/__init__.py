"""Status cascade rules, auto-discovered by the RuleRegistry."""
