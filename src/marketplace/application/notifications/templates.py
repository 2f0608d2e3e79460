"""HTML and plain-text bodies for vendor decision emails.

Every user-supplied value is escaped before it lands in the HTML part.
"""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Optional

from ...domain.shared import EmailMessage
from ...domain.vendor.entities import Vendor

_WRAPPER = (
    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
    '<div style="background: {color}; color: white; padding: 20px; text-align: center;">'
    "<h1>{title}</h1></div>"
    '<div style="padding: 30px; background: #f8f9fa;">{body}</div></div>'
)

_BUTTON = (
    '<p style="text-align: center;"><a href="{href}" style="display: inline-block; '
    "background: #007bff; color: white; padding: 12px 24px; text-decoration: none; "
    'border-radius: 5px;">{label}</a></p>'
)


def _details_block(vendor: Vendor, status_html: str, date_label: str, when: datetime) -> str:
    return (
        '<div style="background: white; padding: 20px; border-radius: 5px; margin: 20px 0;">'
        "<h3>Application Details:</h3>"
        f"<p><strong>Store Name:</strong> {escape(vendor.store_name)}</p>"
        f"<p><strong>Email:</strong> {escape(vendor.email)}</p>"
        f"<p><strong>Status:</strong> {status_html}</p>"
        f"<p><strong>{date_label}:</strong> {when.date().isoformat()}</p>"
        "</div>"
    )


def render_approval(
    vendor: Vendor, frontend_base_url: str, note: Optional[str] = None
) -> EmailMessage:
    login_url = f"{frontend_base_url}/vendor/login"
    when = vendor.approved_at or datetime.now()
    note_html = (
        f"<p><strong>Note from the team:</strong> {escape(note)}</p>" if note else ""
    )
    body = (
        "<h2>Your vendor application has been approved!</h2>"
        f"<p>Dear {escape(vendor.store_name)} team,</p>"
        "<p>We're excited to inform you that your vendor application has been "
        "<strong>approved</strong>!</p>"
        + _details_block(
            vendor,
            '<span style="color: #28a745; font-weight: bold;">APPROVED</span>',
            "Approved Date",
            when,
        )
        + note_html
        + "<p>You can now log in to your vendor dashboard and start selling!</p>"
        + _BUTTON.format(href=escape(login_url), label="Login to Dashboard")
        + "<p>Welcome to the marketplace!</p>"
    )
    text = (
        f"Congratulations! Your vendor application for {vendor.store_name} "
        "has been approved!"
        + (f" Note: {note}" if note else "")
        + f" You can now log in at: {login_url}"
    )
    return EmailMessage(
        to=vendor.email,
        subject=f"Your {vendor.store_name} vendor application has been approved!",
        html=_WRAPPER.format(color="#28a745", title="Congratulations!", body=body),
        text=text,
    )


def render_rejection(
    vendor: Vendor, frontend_base_url: str, reason: str
) -> EmailMessage:
    register_url = f"{frontend_base_url}/vendor/register"
    when = vendor.rejected_at or datetime.now()
    body = (
        "<h2>Update on your vendor application</h2>"
        f"<p>Dear {escape(vendor.store_name)} team,</p>"
        "<p>Thank you for your interest in joining our marketplace. After careful "
        "review, we are unable to approve your vendor application at this time.</p>"
        + _details_block(
            vendor,
            '<span style="color: #dc3545; font-weight: bold;">NOT APPROVED</span>',
            "Review Date",
            when,
        )
        + '<div style="background: white; padding: 20px; border-left: 4px solid #dc3545; '
        'border-radius: 5px; margin: 20px 0;"><h3>Reason for Decision:</h3>'
        f"<p>{escape(reason)}</p></div>"
        + "<p>We encourage you to reapply once you've addressed any concerns.</p>"
        + _BUTTON.format(href=escape(register_url), label="Submit New Application")
    )
    text = (
        "Update on your vendor application. We are unable to approve your "
        f"application at this time. Reason: {reason} "
        f"You can reapply at: {register_url}"
    )
    return EmailMessage(
        to=vendor.email,
        subject=f"Update on your {vendor.store_name} vendor application",
        html=_WRAPPER.format(color="#dc3545", title="Application Update", body=body),
        text=text,
    )
