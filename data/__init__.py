"""Sample data helpers for the SplitSpend dashboard."""
