"""Transition notification pipeline shared by status and verification changes."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Mapping

from issue_notifier.domain.entities import (
    CallerIdentity,
    DispatchResult,
    Issue,
    Recipient,
    Transition,
    TransitionKind,
)

from .composer import ComposedMessage, compose_message
from .errors import NotFound, Unauthenticated, Unauthorized
from .policies import DEFAULT_POLICIES, TransitionPolicy
from .ports import (
    EmailSendStatus,
    EmailSender,
    IdentityVerifier,
    IssueDirectory,
    NotificationSink,
    UserDirectory,
)
from .recipients import resolve_recipients
from .validators import parse_transition

logger = logging.getLogger(__name__)


class TransitionDispatcher:
    """Authenticate, authorize and fan out one transition notification.

    Failures raised before the fan-out (:class:`Unauthenticated`,
    :class:`InvalidPayload`, :class:`NotFound`, :class:`Unauthorized`) abort
    the dispatch without side effects. Once recipients are resolved every
    channel failure is logged and counted, and a :class:`DispatchResult` is
    always returned.
    """

    def __init__(
        self,
        *,
        identity_verifier: IdentityVerifier,
        issues: IssueDirectory,
        users: UserDirectory,
        notifications: NotificationSink,
        email_sender: EmailSender,
        delivery_timeout: float = 10.0,
        max_workers: int = 8,
        policies: Mapping[TransitionKind, TransitionPolicy] | None = None,
    ) -> None:
        self._identity_verifier = identity_verifier
        self._issues = issues
        self._users = users
        self._notifications = notifications
        self._email_sender = email_sender
        self._delivery_timeout = delivery_timeout
        self._max_workers = max_workers
        self._policies = dict(policies or DEFAULT_POLICIES)

    def dispatch(
        self,
        kind: TransitionKind | str,
        raw_payload: Any,
        credential: str | None,
    ) -> DispatchResult:
        kind = TransitionKind(kind)
        policy = self._policies[kind]

        caller = self._authenticate(credential)
        transition = parse_transition(kind, raw_payload)
        logger.info(
            "Processing %s change for issue %s: %s -> %s",
            kind.value,
            transition.issue_id,
            transition.old_state,
            transition.new_state,
        )

        issue = self._issues.get_issue(transition.issue_id)
        if issue is None:
            logger.warning("Issue %s not found", transition.issue_id)
            raise NotFound("Issue not found")

        self._authorize(policy, caller, issue)

        recipients = self._collect_recipients(issue)
        result = self._deliver(issue, transition, policy, recipients)
        logger.info(
            "Dispatch for issue %s finished: %s recipients, %s notifications created, %s emails sent",
            issue.id,
            result.recipients,
            result.notifications_created,
            result.emails_sent,
        )
        return result

    def _authenticate(self, credential: str | None) -> CallerIdentity:
        if not credential:
            logger.warning("Missing caller credential")
            raise Unauthenticated("Missing authorization header")
        try:
            return self._identity_verifier.verify(credential)
        except ValueError as exc:
            logger.warning("Authentication failed: %s", exc)
            raise Unauthenticated("Unauthorized - invalid or expired token") from exc

    def _authorize(
        self, policy: TransitionPolicy, caller: CallerIdentity, issue: Issue
    ) -> None:
        roles = self._users.list_roles(caller.user_id)
        if not policy.is_authorized(caller, issue, roles):
            logger.warning(
                "User %s lacks permission to trigger %s notifications for issue %s",
                caller.user_id,
                policy.kind.value,
                issue.id,
            )
            raise Unauthorized(policy.forbidden_message)

    def _collect_recipients(self, issue: Issue) -> list[Recipient]:
        try:
            follower_ids = list(self._issues.list_follower_ids(issue.id))
        except Exception:
            logger.exception("Error fetching followers for issue %s", issue.id)
            follower_ids = []

        user_ids = [issue.reporter_id] if issue.reporter_id else []
        user_ids.extend(follower_ids)
        try:
            contacts = self._users.get_contacts(user_ids) if user_ids else {}
        except Exception:
            logger.exception("Error fetching contact details for issue %s", issue.id)
            contacts = {}

        return resolve_recipients(issue, follower_ids, contacts)

    def _persist(
        self, recipient: Recipient, transition: Transition, message: ComposedMessage
    ) -> None:
        self._notifications.persist(
            recipient,
            issue_id=transition.issue_id,
            title=message.title,
            message=message.in_app_message,
            event_type=transition.notification_type,
        )

    def _deliver(
        self,
        issue: Issue,
        transition: Transition,
        policy: TransitionPolicy,
        recipients: list[Recipient],
    ) -> DispatchResult:
        in_app_jobs: list[tuple[Recipient, ComposedMessage]] = []
        email_jobs: list[tuple[Recipient, ComposedMessage]] = []
        for recipient in recipients:
            try:
                message = compose_message(issue, transition, policy, recipient)
            except Exception:
                logger.exception(
                    "Error composing notification for user %s on issue %s",
                    recipient.user_id,
                    issue.id,
                )
                continue
            in_app_jobs.append((recipient, message))
            if recipient.should_email:
                email_jobs.append((recipient, message))
            else:
                logger.debug(
                    "Skipping email for user %s on issue %s (address=%s, opted_in=%s)",
                    recipient.user_id,
                    issue.id,
                    bool(recipient.email),
                    recipient.wants_email,
                )

        # Email has its own pool; inbox writes never queue behind the provider.
        email_executor = None
        email_futures: dict[Future, Recipient] = {}
        if email_jobs:
            email_executor = ThreadPoolExecutor(
                max_workers=min(self._max_workers, len(email_jobs)),
                thread_name_prefix="notify-email",
            )
            for recipient, message in email_jobs:
                future = email_executor.submit(
                    self._email_sender.send,
                    recipient.email,
                    message.email_subject,
                    message.email_html,
                )
                email_futures[future] = recipient

        try:
            notifications_created = self._write_in_app(issue, transition, in_app_jobs)
            emails_sent = self._collect_emails(issue, email_futures)
        finally:
            if email_executor is not None:
                email_executor.shutdown(wait=False, cancel_futures=True)

        return DispatchResult(
            recipients=len(recipients),
            notifications_created=notifications_created,
            emails_sent=emails_sent,
        )

    def _write_in_app(
        self,
        issue: Issue,
        transition: Transition,
        jobs: list[tuple[Recipient, ComposedMessage]],
    ) -> int:
        """Persist every inbox row; returns only after all writes have finished."""

        if not jobs:
            return 0
        futures: dict[Future, Recipient] = {}
        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(jobs)),
            thread_name_prefix="notify-in-app",
        ) as executor:
            for recipient, message in jobs:
                futures[executor.submit(self._persist, recipient, transition, message)] = recipient
            wait(futures)

        created = 0
        for future, recipient in futures.items():
            try:
                future.result()
            except Exception:
                logger.exception(
                    "Error creating in-app notification for user %s on issue %s",
                    recipient.user_id,
                    issue.id,
                )
                continue
            created += 1
        return created

    def _collect_emails(self, issue: Issue, futures: dict[Future, Recipient]) -> int:
        if not futures:
            return 0
        done, not_done = wait(futures, timeout=self._delivery_timeout)

        sent = 0
        for future in done:
            recipient = futures[future]
            try:
                outcome = future.result()
            except Exception:
                logger.exception(
                    "Error sending email to user %s for issue %s", recipient.user_id, issue.id
                )
                continue
            if outcome == EmailSendStatus.SENT:
                sent += 1

        for future in not_done:
            logger.error(
                "Timed out sending email to user %s for issue %s after %ss",
                futures[future].user_id,
                issue.id,
                self._delivery_timeout,
            )
        return sent


__all__ = ["TransitionDispatcher"]
