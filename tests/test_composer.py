"""Notification copy for reporters and followers."""

from conftest import FOLLOWER_1_ID, ISSUE_ID, REPORTER_ID, build_issue
from issue_notifier.application.use_cases.notifications import (
    STATUS_POLICY,
    VERIFICATION_POLICY,
    compose_message,
    render_email_html,
)
from issue_notifier.domain.entities import Recipient, Transition, TransitionKind

REPORTER = Recipient(REPORTER_ID, "reporter@example.com", True, True)
FOLLOWER = Recipient(FOLLOWER_1_ID, "follower1@example.com", True, False)


def _status(old="pending", new="in_progress"):
    return Transition(TransitionKind.STATUS, ISSUE_ID, old, new)


def _verification(old=None, new="verified", name=None, role=None):
    return Transition(TransitionKind.VERIFICATION, ISSUE_ID, old, new, name, role)


def test_status_copy_for_reporter() -> None:
    message = compose_message(build_issue(), _status(), STATUS_POLICY, REPORTER)

    assert message.title == "Issue Status Updated: In Progress"
    assert message.email_subject == message.title
    assert message.in_app_message == (
        'Your issue "Deep pothole on Main Street" has been updated from Pending to In Progress.'
    )
    assert "You're following this issue" not in message.email_html


def test_status_copy_for_follower() -> None:
    issue = build_issue(title="T" * 120)

    message = compose_message(issue, _status(), STATUS_POLICY, FOLLOWER)

    assert message.title == "Issue You Follow Updated"
    assert message.email_subject == f"Issue Update: {'T' * 50}"
    assert message.in_app_message.startswith(f'Issue "{"T" * 100}" has been')
    assert "You're following this issue" in message.email_html


def test_verification_copy_names_the_verifier_role() -> None:
    transition = _verification(name="Dana Ortiz", role="moderator")

    reporter = compose_message(build_issue(), transition, VERIFICATION_POLICY, REPORTER)
    follower = compose_message(build_issue(), transition, VERIFICATION_POLICY, FOLLOWER)

    assert reporter.title == "Issue Verification Updated: Verified"
    assert reporter.in_app_message == (
        'Your issue "Deep pothole on Main Street" has been verified by a moderator.'
    )
    assert follower.email_subject == "Verification Update: Deep pothole on Main Street"
    assert follower.in_app_message == (
        'Issue "Deep pothole on Main Street" verification status changed from None to Verified.'
    )
    assert "Verified by:</strong> Dana Ortiz (moderator)" in reporter.email_html


def test_verification_copy_without_role() -> None:
    message = compose_message(
        build_issue(), _verification(old="pending_verification", new="invalid"),
        VERIFICATION_POLICY, REPORTER,
    )

    assert message.in_app_message.endswith("has been invalid.")
    assert "Verified by" not in message.email_html


def test_email_escapes_user_supplied_text() -> None:
    issue = build_issue(
        title="<script>alert(1)</script>",
        description="<img src=x onerror=alert(2)>",
        address="<b>Main</b> & 5th",
    )
    transition = _verification(name="<i>Eve</i>", role="<u>moderator</u>")

    html = render_email_html(issue, transition, VERIFICATION_POLICY, is_follower=False)

    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<img" not in html
    assert "Location: &lt;b&gt;Main&lt;/b&gt; &amp; 5th" in html
    assert "&lt;i&gt;Eve&lt;/i&gt;" in html


def test_long_description_is_truncated() -> None:
    issue = build_issue(description="d" * 200)

    html = render_email_html(issue, _status(), STATUS_POLICY, is_follower=True)

    assert f"{'d' * 150}..." in html
    assert "d" * 151 not in html


def test_missing_address_is_omitted() -> None:
    html = render_email_html(build_issue(address=None), _status(), STATUS_POLICY, is_follower=False)

    assert "Location:" not in html
