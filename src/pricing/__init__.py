from src.pricing.engine import compute_quote, default_discount_policy, is_discount_active
from src.pricing.formatter import format_lead_text, format_money, room_label

__all__ = [
    "compute_quote",
    "default_discount_policy",
    "is_discount_active",
    "format_lead_text",
    "format_money",
    "room_label",
]
