"""Render in-app and email copy for issue transitions."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape

from issue_notifier.domain.entities import Issue, Recipient, Transition, TransitionKind

from .policies import TransitionPolicy

PRODUCT_NAME = "City Sentinel"
DESCRIPTION_PREVIEW_LENGTH = 150
SUBJECT_TITLE_LENGTH = 50


@dataclass(frozen=True)
class ComposedMessage:
    """Copy delivered to a single recipient through every channel."""

    title: str
    in_app_message: str
    email_subject: str
    email_html: str


@dataclass(frozen=True)
class _KindCopy:
    title_length: int
    reporter_title: str
    follower_title: str
    follower_subject: str
    email_header: str
    reporter_heading: str
    follower_heading: str
    status_caption: str
    closing: str
    accent_from: str
    accent_to: str
    banner_background: str
    badge_styles: dict[str, str]


_COPY: dict[TransitionKind, _KindCopy] = {
    TransitionKind.STATUS: _KindCopy(
        title_length=100,
        reporter_title="Issue Status Updated: {label}",
        follower_title="Issue You Follow Updated",
        follower_subject="Issue Update: {title}",
        email_header="Issue Status Update",
        reporter_heading="Your issue has been updated!",
        follower_heading="An issue you follow has been updated!",
        status_caption="New Status:",
        closing="Thank you for helping improve our city! We appreciate your patience and engagement.",
        accent_from="#2563eb",
        accent_to="#3b82f6",
        banner_background="#eff6ff",
        badge_styles={
            "pending": "background: #fef3c7; color: #92400e;",
            "in_progress": "background: #dbeafe; color: #1e40af;",
            "resolved": "background: #d1fae5; color: #065f46;",
            "withdrawn": "background: #f3f4f6; color: #374151;",
        },
    ),
    TransitionKind.VERIFICATION: _KindCopy(
        title_length=80,
        reporter_title="Issue Verification Updated: {label}",
        follower_title="Issue You Follow - Verification Update",
        follower_subject="Verification Update: {title}",
        email_header="Issue Verification Update",
        reporter_heading="Your issue verification status has changed!",
        follower_heading="An issue you follow has been verified!",
        status_caption="Verification Status:",
        closing="Thank you for helping improve our city! We appreciate your engagement.",
        accent_from="#7c3aed",
        accent_to="#8b5cf6",
        banner_background="#f3e8ff",
        badge_styles={
            "pending_verification": "background: #fef3c7; color: #92400e;",
            "verified": "background: #d1fae5; color: #065f46;",
            "invalid": "background: #fee2e2; color: #991b1b;",
            "spam": "background: #f3f4f6; color: #374151;",
        },
    ),
}


def _in_app_message(
    issue: Issue, transition: Transition, policy: TransitionPolicy, *, is_reporter: bool
) -> str:
    copy = _COPY[transition.kind]
    short_title = issue.title[: copy.title_length]
    old_label = policy.label(transition.old_state)
    new_label = policy.label(transition.new_state)

    if transition.kind is TransitionKind.VERIFICATION:
        if is_reporter:
            actor = f" by a {transition.actor_role}" if transition.actor_role else ""
            return f'Your issue "{short_title}" has been {new_label.lower()}{actor}.'
        return (
            f'Issue "{short_title}" verification status changed from '
            f"{old_label} to {new_label}."
        )

    owner = "Your issue" if is_reporter else "Issue"
    return f'{owner} "{short_title}" has been updated from {old_label} to {new_label}.'


def _description_preview(description: str) -> str:
    preview = escape(description[:DESCRIPTION_PREVIEW_LENGTH])
    if len(description) > DESCRIPTION_PREVIEW_LENGTH:
        preview += "..."
    return preview


def render_email_html(
    issue: Issue,
    transition: Transition,
    policy: TransitionPolicy,
    *,
    is_follower: bool,
) -> str:
    """Return the HTML email body; every free-text value is escaped."""

    copy = _COPY[transition.kind]
    label = escape(policy.label(transition.new_state))
    badge_style = copy.badge_styles.get(transition.new_state, "")

    banner = ""
    if is_follower:
        banner = (
            f'<div style="background: {copy.banner_background}; border-left: 4px solid '
            f'{copy.accent_from}; padding: 12px; margin: 15px 0;">'
            "<strong>You're following this issue</strong>"
            '<p style="margin: 5px 0 0; font-size: 14px;">'
            "You're receiving this because you're following this issue.</p>"
            "</div>"
        )

    address = ""
    if issue.address:
        address = f'<p style="font-size: 14px; color: #6b7280;">Location: {escape(issue.address)}</p>'

    verifier = ""
    if transition.kind is TransitionKind.VERIFICATION and (
        transition.actor_name or transition.actor_role
    ):
        role = f" ({escape(transition.actor_role)})" if transition.actor_role else ""
        verifier = (
            '<div style="background: #ede9fe; padding: 10px 15px; border-radius: 6px; '
            'margin: 10px 0; font-size: 14px;">'
            f"<strong>Verified by:</strong> {escape(transition.actor_name or 'Unknown')}{role}"
            "</div>"
        )

    heading = copy.follower_heading if is_follower else copy.reporter_heading

    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8"></head>'
        '<body style="font-family: -apple-system, BlinkMacSystemFont, \'Segoe UI\', Roboto, '
        'sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 0;">'
        '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">'
        f'<div style="background: linear-gradient(135deg, {copy.accent_from}, {copy.accent_to}); '
        'color: white; padding: 30px; border-radius: 12px 12px 0 0; text-align: center;">'
        f'<h1 style="margin: 0; font-size: 24px;">{PRODUCT_NAME}</h1>'
        f'<p style="margin: 10px 0 0; opacity: 0.9;">{copy.email_header}</p>'
        "</div>"
        '<div style="background: #f8fafc; padding: 30px; border-radius: 0 0 12px 12px;">'
        f"{banner}"
        f'<h2 style="margin-top: 0;">{heading}</h2>'
        '<div style="background: white; border-radius: 8px; padding: 20px; margin: 20px 0;">'
        f'<h3 style="margin-top: 0;">{escape(issue.title)}</h3>'
        f'<p style="color: #6b7280; margin-bottom: 15px;">{_description_preview(issue.description)}</p>'
        f"{address}"
        f"<p><strong>{copy.status_caption}</strong></p>"
        '<span style="display: inline-block; padding: 8px 16px; border-radius: 20px; '
        f'font-weight: 600; margin: 10px 0; {badge_style}">{label}</span>'
        f"{verifier}"
        "</div>"
        f"<p>{copy.closing}</p>"
        "</div>"
        '<div style="text-align: center; color: #6b7280; font-size: 14px; margin-top: 20px;">'
        f"<p>{PRODUCT_NAME} - Making our city better, together</p>"
        '<p style="font-size: 12px; color: #9ca3af;">'
        "You can manage your notification preferences in your profile settings.</p>"
        "</div>"
        "</div></body></html>"
    )


def compose_message(
    issue: Issue,
    transition: Transition,
    policy: TransitionPolicy,
    recipient: Recipient,
) -> ComposedMessage:
    """Build the reporter or follower variant of the notification copy."""

    copy = _COPY[transition.kind]
    new_label = policy.label(transition.new_state)

    if recipient.is_reporter:
        title = copy.reporter_title.format(label=new_label)
        subject = title
    else:
        title = copy.follower_title
        subject = copy.follower_subject.format(title=issue.title[:SUBJECT_TITLE_LENGTH])

    return ComposedMessage(
        title=title,
        in_app_message=_in_app_message(
            issue, transition, policy, is_reporter=recipient.is_reporter
        ),
        email_subject=subject,
        email_html=render_email_html(
            issue, transition, policy, is_follower=not recipient.is_reporter
        ),
    )


__all__ = ["ComposedMessage", "compose_message", "render_email_html"]
