"""Human-readable rendering of quotes for the modal and the manager lead."""

from datetime import date
from typing import Optional

from src.config import settings
from src.schemas.stay_schema import Quote, RoomType, StayRequest

PLACEHOLDER = "—"
NBSP = "\u00a0"

ROOM_LABELS: dict[str, str] = {
    RoomType.STANDARD.value: "Стандарт",
    RoomType.COMFORT.value: "Комфорт",
    RoomType.LUX.value: "Люкс",
}


def room_label(room_type: object) -> str:
    key = room_type.value if isinstance(room_type, RoomType) else str(room_type or "")
    return ROOM_LABELS.get(key, PLACEHOLDER)


def format_money(amount: int) -> str:
    """Whole roubles with non-breaking thousands separators, e.g. ``71 100 ₽``."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", NBSP)
    return f"{sign}{grouped}{NBSP}₽"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return PLACEHOLDER
    return value.strftime("%d.%m.%Y")


def discount_line(quote: Quote) -> str:
    if not quote.discount_applied:
        return f"Скидка: {PLACEHOLDER}"
    return f"Скидка: -{format_money(quote.discount_amount)} ({quote.discount_percent}%)"


def format_lead_text(
    request: StayRequest,
    quote: Quote,
    *,
    name: str = "",
    phone: str = "",
) -> str:
    """
    Render the fixed-order lead summary sent to a manager.

    Name and phone come from the originating form, not from the quote.
    """
    lines = [
        f"Заявка с лендинга «{settings.brand.name}»",
        "",
        f"Имя: {name or PLACEHOLDER}",
        f"Телефон: {phone or PLACEHOLDER}",
        f"Дата заезда: {format_date(request.checkin)}",
        f"Ночей: {quote.nights}",
        f"Гостей: {quote.guests} (взр: {request.adults}, дети: {request.children})",
        f"Номер: {room_label(request.room_type)}",
        "",
        f"База: {format_money(quote.base_amount)}",
        discount_line(quote),
        f"Итого: {format_money(quote.total_amount)}",
        f"Аванс {quote.prepay_percent}%: {format_money(quote.prepay_amount)}",
        f"Остаток: {format_money(quote.remainder_amount)}",
    ]
    return "\n".join(lines)


def quote_rows(request: StayRequest, quote: Quote) -> dict[str, Optional[str]]:
    """Values for the quote modal cells; the discount cell is None when hidden."""
    return {
        "room": room_label(request.room_type),
        "checkin": format_date(request.checkin),
        "days": str(quote.nights),
        "guests": str(quote.guests),
        "base": format_money(quote.base_amount),
        "discount": (
            f"-{format_money(quote.discount_amount)}" if quote.discount_applied else None
        ),
        "total": format_money(quote.total_amount),
        "prepay": format_money(quote.prepay_amount),
        "rest": format_money(quote.remainder_amount),
    }
