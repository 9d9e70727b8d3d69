"""Build newsletter drafts from resources for the send pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace

from config import AppConfig
from models import NewsletterStatus, Resource, iter_blocks
from services.assembler import EmailAssembler
from services.block_renderer import BlockRenderer
from services.converter import ResourceNewsletterConverter
from services.document_renderer import DocumentRenderer
from services.failures import save_dead_letter
from services.normalizer import normalize
from services.observability import LogContext, get_logger
from services.resource_store import ResourceStore
from services.validator import ContentValidationError, validate_rendered_html


class ResourceNotFoundError(LookupError):
    """Raised when the resource store has no record for an id."""


class NewsletterSyncError(RuntimeError):
    """Raised when a draft cannot be re-synced from its source resource."""


@dataclass(frozen=True)
class NewsletterDraft:
    """Newsletter content body and resource link handed to the send pipeline."""

    subject: str
    content_html: str
    status: NewsletterStatus
    source_resource_id: str | None
    resource_version: int
    sync_enabled: bool
    newsletter_id: str | None = None


class NewsletterBuilder:
    """Render resources into validated newsletter drafts."""

    def __init__(
        self,
        config: AppConfig,
        store: ResourceStore,
        *,
        converter: ResourceNewsletterConverter | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._block_renderer = BlockRenderer()
        self._converter = converter or ResourceNewsletterConverter(
            document_renderer=DocumentRenderer(self._block_renderer),
            assembler=EmailAssembler(config.email_template_path),
        )
        self._logger = get_logger()

    def create_from_resource(
        self,
        resource_id: str,
        *,
        subject: str | None = None,
    ) -> NewsletterDraft:
        """Create a first-version draft; the subject defaults to the resource title."""
        resource = self._load(resource_id)
        html = self._render(resource, resource_version=1)
        return NewsletterDraft(
            subject=(subject or "").strip() or resource.title.strip(),
            content_html=html,
            status=NewsletterStatus.DRAFT,
            source_resource_id=resource_id,
            resource_version=1,
            sync_enabled=self._config.default_sync_enabled,
        )

    def sync_from_resource(self, draft: NewsletterDraft) -> NewsletterDraft:
        """Re-render a linked draft from its source and bump the resource version."""
        if not draft.source_resource_id:
            raise NewsletterSyncError("Newsletter is not linked to a resource")
        if not draft.sync_enabled:
            raise NewsletterSyncError("Sync is disabled for this newsletter")

        try:
            resource = self._load(draft.source_resource_id)
        except ResourceNotFoundError as exc:
            raise NewsletterSyncError("Source resource not found") from exc

        next_version = draft.resource_version + 1
        html = self._render(
            resource,
            resource_version=next_version,
            newsletter_id=draft.newsletter_id,
        )
        self._logger.info(
            "newsletter_synced",
            context=LogContext(
                resource_id=draft.source_resource_id,
                newsletter_id=draft.newsletter_id,
                resource_version=next_version,
            ),
        )
        return replace(draft, content_html=html, resource_version=next_version)

    def _load(self, resource_id: str) -> Resource:
        resource = self._store.get_resource_by_id(resource_id)
        if resource is None:
            raise ResourceNotFoundError(f"Resource not found: {resource_id}")
        return resource

    def _render(
        self,
        resource: Resource,
        *,
        resource_version: int,
        newsletter_id: str | None = None,
    ) -> str:
        context = LogContext(
            resource_id=resource.id,
            newsletter_id=newsletter_id,
            resource_version=resource_version,
        )
        html = self._converter.convert(resource)

        errors = validate_rendered_html(html, max_chars=self._config.max_html_chars)
        if errors:
            summary = "; ".join(errors)
            dead_letter = save_dead_letter(
                failure_dir=self._config.failure_log_dir,
                stage="render_validation",
                resource_id=resource.id,
                errors=errors,
                html=html,
                resource_version=resource_version,
                newsletter_id=newsletter_id,
            )
            self._logger.error(
                "newsletter_render_rejected",
                context=context,
                error=summary,
                dead_letter=str(dead_letter),
            )
            raise ContentValidationError(summary)

        content = normalize(resource.content)
        unsupported = sum(
            1 for block in iter_blocks(content) if not self._block_renderer.supports(block)
        )
        self._logger.info(
            "newsletter_rendered",
            context=context,
            html_length=len(html),
            tab_count=len(content.tabs),
            unsupported_blocks=unsupported,
        )
        return html
