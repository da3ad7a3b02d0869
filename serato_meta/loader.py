from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Protocol

from .config import LoaderSettings
from .container import Container
from .diagnostics import MarkerDiagnostics
from .models import TagDecodeError, TagKind, TagRecord, record_kind

logger = logging.getLogger(__name__)


class TagProvider(Protocol):
    kind: TagKind

    def decode(self, source: Any) -> Optional[TagRecord]: ...


def build_container(
    source: Any,
    providers: Iterable[TagProvider],
    settings: Optional[LoaderSettings] = None,
    diagnostics: Optional[MarkerDiagnostics] = None,
) -> Container:
    """Runs each enabled provider once against `source` and collects the decoded records.

    A provider that finds no tag returns None and its slot stays absent. Decode failures
    leave the slot absent as well unless `settings.strict` is set.
    """
    cfg = settings or LoaderSettings()
    enabled = set(cfg.enabled_tags)
    container = Container(diagnostics=diagnostics or MarkerDiagnostics())
    for provider in providers:
        if provider.kind not in enabled:
            logger.debug("Skipping disabled tag %s", provider.kind.tag_name)
            continue
        try:
            record = provider.decode(source)
        except TagDecodeError as exc:
            if cfg.strict:
                raise
            logger.warning("Failed to decode %s: %s", provider.kind.tag_name, exc)
            continue
        if record is None:
            continue
        kind = record_kind(record)
        if kind is not provider.kind:
            raise TypeError(f"{provider.kind.tag_name} provider returned a {kind.tag_name} record")
        container.populate(record)
    return container
