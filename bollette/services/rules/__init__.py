"""Usage: rule-based bill extraction helpers."""

from bollette.services.rules.bill_rule_extractor import BillRuleExtractor, parse_bill_text

__all__ = ["BillRuleExtractor", "parse_bill_text"]
