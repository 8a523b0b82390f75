"""
Guest email templates.

``render`` is pure: it turns a notification type, a reservation and the
brand settings into a subject with HTML and plain-text bodies. Every
message shares the branded layout; only the heading, paragraphs and the
detail table differ per type.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Tuple

from django.conf import settings  # type: ignore

from .rules import CONFIRMATION, PAYMENT_RECEIPT, PRE_ARRIVAL, REVIEW_REQUEST


@dataclass(frozen=True)
class BrandConfig:
    name: str = "Quarters"
    tagline: str = ""
    primary_color: str = "#8B0000"
    accent_color: str = "#C5A059"
    support_email: str = ""
    support_phone: str = ""
    address: str = ""
    check_in_time: str = "2:00 PM"
    check_out_time: str = "11:00 AM"

    @classmethod
    def from_settings(cls) -> "BrandConfig":
        raw = dict(getattr(settings, "QUARTERS_BRAND", {}) or {})
        known = {k: v for k, v in raw.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass(frozen=True)
class RenderedMessage:
    subject: str
    html: str
    text: str


@dataclass
class _Body:
    subject: str
    heading: str
    paragraphs: List[str] = field(default_factory=list)
    rows: List[Tuple[str, str]] = field(default_factory=list)
    closing: List[str] = field(default_factory=list)


def format_date(value: date) -> str:
    return f"{value:%A, %B} {value.day}, {value.year}"


def format_money(amount, currency: str) -> str:
    return f"{currency} {Decimal(amount):,.2f}"


def _stay_rows(reservation, brand: BrandConfig) -> List[Tuple[str, str]]:
    return [
        ("Booking reference", reservation.reference),
        ("Accommodation", reservation.unit.name),
        ("Check-in", f"{format_date(reservation.check_in)} from {brand.check_in_time}"),
        ("Check-out", f"{format_date(reservation.check_out)} by {brand.check_out_time}"),
        ("Nights", str(reservation.nights)),
    ]


def _confirmation(reservation, brand: BrandConfig) -> _Body:
    return _Body(
        subject=f"Your Reservation at {brand.name} is Confirmed!",
        heading="Your reservation is confirmed",
        paragraphs=[
            f"Dear {reservation.guest_name},",
            f"Thank you for choosing {brand.name}. We have received your reservation.",
        ],
        rows=_stay_rows(reservation, brand)
        + [("Total", format_money(reservation.total_price, reservation.currency))],
        closing=["We look forward to welcoming you."],
    )


def _pre_arrival(reservation, brand: BrandConfig) -> _Body:
    return _Body(
        subject=f"Your Stay at {brand.name} is Just 2 Days Away!",
        heading="Your stay is just 2 days away",
        paragraphs=[
            f"Dear {reservation.guest_name},",
            f"We are getting ready to welcome you to {brand.name}.",
            f"Address: {brand.address}" if brand.address else "",
            "Please bring a valid photo ID and this confirmation.",
        ],
        rows=_stay_rows(reservation, brand),
        closing=["See you soon!"],
    )


def _review_request(reservation, brand: BrandConfig) -> _Body:
    return _Body(
        subject=f"How Was Your Stay at {brand.name}?",
        heading="Thank you for staying with us",
        paragraphs=[
            f"Dear {reservation.guest_name},",
            f"We hope you enjoyed your time in {reservation.unit.name}.",
            "A few words about your stay help us and future guests.",
        ],
        rows=[("Booking reference", reservation.reference)],
        closing=["We hope to host you again."],
    )


def _payment_receipt(reservation, brand: BrandConfig) -> _Body:
    return _Body(
        subject=f"Payment Receipt - {brand.name} ({reservation.reference})",
        heading="Payment received",
        paragraphs=[
            f"Dear {reservation.guest_name},",
            "This email confirms that we have received your payment.",
        ],
        rows=_stay_rows(reservation, brand)
        + [
            ("Payment method", reservation.get_payment_method_display()),
            ("Amount paid", format_money(reservation.total_price, reservation.currency)),
        ],
        closing=["Please keep this receipt for your records."],
    )


BUILDERS: Dict[str, Callable] = {
    CONFIRMATION: _confirmation,
    PRE_ARRIVAL: _pre_arrival,
    REVIEW_REQUEST: _review_request,
    PAYMENT_RECEIPT: _payment_receipt,
}


def _layout(body: _Body, brand: BrandConfig) -> str:
    e = html.escape
    paragraphs = "".join(f"<p>{e(p)}</p>" for p in body.paragraphs if p)
    rows = "".join(
        f'<tr><td class="label">{e(label)}</td><td class="value">{e(value)}</td></tr>'
        for label, value in body.rows
    )
    closing = "".join(f"<p>{e(p)}</p>" for p in body.closing if p)
    contact = " | ".join(e(c) for c in (brand.support_email, brand.support_phone) if c)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{e(body.subject)}</title>
  <style>
    body {{ margin: 0; font-family: Georgia, serif; background: #f5f5f5; }}
    .container {{ max-width: 600px; margin: 0 auto; background: #ffffff; }}
    .header {{ background: {e(brand.primary_color)}; padding: 32px 20px; text-align: center; }}
    .logo {{ color: {e(brand.accent_color)}; font-size: 28px; margin: 0; }}
    .content {{ padding: 32px 28px; color: #333333; line-height: 1.7; }}
    .details {{ border-left: 4px solid {e(brand.accent_color)}; background: #f9f9f9; width: 100%; }}
    .label {{ color: #666666; font-size: 12px; text-transform: uppercase; padding: 8px; }}
    .value {{ font-weight: bold; padding: 8px; }}
    .footer {{ background: #2a2a2a; color: #ffffff; padding: 24px; text-align: center; font-size: 12px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1 class="logo">{e(brand.name)}</h1>
      <p>{e(brand.tagline)}</p>
    </div>
    <div class="content">
      <h2>{e(body.heading)}</h2>
      {paragraphs}
      <table class="details">{rows}</table>
      {closing}
      <p><strong>The {e(brand.name)} Team</strong></p>
    </div>
    <div class="footer">
      <p>{e(brand.address)}</p>
      <p>{contact}</p>
    </div>
  </div>
</body>
</html>"""


def _plain(body: _Body, brand: BrandConfig) -> str:
    lines = [body.heading.upper(), ""]
    lines += [p for p in body.paragraphs if p]
    lines.append("")
    lines += [f"{label}: {value}" for label, value in body.rows]
    lines.append("")
    lines += [p for p in body.closing if p]
    lines += ["", f"The {brand.name} Team"]
    contact = " | ".join(c for c in (brand.support_email, brand.support_phone) if c)
    if contact:
        lines.append(contact)
    return "\n".join(lines)


def _finish(body: _Body, brand: BrandConfig) -> RenderedMessage:
    return RenderedMessage(subject=body.subject, html=_layout(body, brand), text=_plain(body, brand))


def render(notification_type: str, reservation, brand: BrandConfig) -> RenderedMessage:
    try:
        builder = BUILDERS[notification_type]
    except KeyError:
        raise ValueError(f"No template for notification type {notification_type!r}") from None
    return _finish(builder(reservation, brand), brand)


def render_test(brand: BrandConfig) -> RenderedMessage:
    body = _Body(
        subject=f"Test email from {brand.name}",
        heading="Email delivery is working",
        paragraphs=["This is a test message sent from the admin panel."],
        rows=[("Brand", brand.name)],
    )
    return _finish(body, brand)
