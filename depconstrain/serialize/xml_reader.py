"""XML constraints reader — a push-based SAX state machine.

The document is fed to an incremental expat parser in fixed-size chunks,
so character data for one value may arrive split across several
``characters`` callbacks.  Each text field accumulates its fragments and
commits them to the ``ConstraintBuilder`` only when its end tag fires.

The parser is hardened for untrusted input: DOCTYPE declarations are
rejected outright (which also rules out entity expansion), external
general and parameter entities are never resolved, and namespace
processing is off.
"""

from __future__ import annotations

import logging
import xml.sax
from typing import BinaryIO
from xml.sax.handler import (
    ContentHandler,
    LexicalHandler,
    feature_external_ges,
    feature_external_pes,
    feature_namespaces,
    property_lexical_handler,
)
from xml.sax.xmlreader import AttributesImpl

from depconstrain.errors import DependencyConstrainError
from depconstrain.models.constraint import ConstraintBuilder
from depconstrain.models.constraint_set import ConstraintSet, ConstraintSetBuilder
from depconstrain.serialize import xml_tags as tags

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192


def _invalid(message: str) -> DependencyConstrainError:
    return DependencyConstrainError(f"Invalid dependency constraints file: {message}")


class ConstraintsHandler(ContentHandler, LexicalHandler):
    """SAX handler assembling constraints into a ``ConstraintSetBuilder``.

    Tracks one "currently inside" flag per element kind.  A start tag is
    only accepted while the flag of its required parent is set.
    """

    def __init__(self, constraints_builder: ConstraintSetBuilder) -> None:
        super().__init__()
        self._constraints_builder = constraints_builder
        self._inside: dict[str, bool] = {tag: False for tag in tags.PARENT_TAGS}
        self._current: ConstraintBuilder | None = None
        self._seen_rejected = False
        # Open text field -> accumulated fragments
        self._text_tag: str | None = None
        self._fragments: list[str] = []
        self._prefix = ""
        # Element depth, counting unknown elements too
        self._depth = 0
        self._seen_root = False

    # ------------------------------------------------------------------
    # Lexical events
    # ------------------------------------------------------------------

    def startDTD(self, name: str, public_id: str | None, system_id: str | None) -> None:
        raise _invalid("DOCTYPE declarations are not allowed")

    # ------------------------------------------------------------------
    # Content events
    # ------------------------------------------------------------------

    def endDocument(self) -> None:
        if not self._seen_root:
            raise _invalid(f"<{tags.CONSTRAINTS}> must be the root tag")

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        depth = self._depth
        self._depth += 1
        if name not in tags.PARENT_TAGS:
            logger.debug("Ignoring unknown element <%s>", name)
            return

        if self._text_tag is not None:
            raise _invalid(f"<{name}> must not be found under the <{self._text_tag}> tag")

        parent = tags.PARENT_TAGS[name]
        if parent is None:
            if depth:
                raise _invalid(f"<{name}> must be the root tag")
            self._seen_root = True
        elif not self._inside[parent]:
            raise _invalid(f"<{name}> must be found under the <{parent}> tag")

        if name == tags.CONSTRAINT:
            if self._inside[tags.CONSTRAINT]:
                raise _invalid(f"<{name}> must not be found under the <{name}> tag")
            self._current = ConstraintBuilder(
                region=tags.CONSTRAINT, field_labels=tags.FIELD_LABELS
            )
            self._seen_rejected = False
        elif name == tags.REJECTED:
            if self._seen_rejected:
                raise _invalid(f"<{name}> must appear at most once under the <{tags.CONSTRAINT}> tag")
            self._seen_rejected = True
        elif name in tags.TEXT_TAGS:
            self._ensure_not_repeated(name)
            self._text_tag = name
            self._fragments = []
            self._prefix = ""
            if name == tags.BECAUSE:
                advisory = attrs.get(tags.ADVISORY)
                if advisory is not None:
                    self._prefix = f"{advisory}: "

        self._inside[name] = True

    def endElement(self, name: str) -> None:
        self._depth -= 1
        if name not in tags.PARENT_TAGS:
            return

        self._inside[name] = False
        if name in tags.TEXT_TAGS:
            self._commit_text(name)
        elif name == tags.CONSTRAINT:
            assert self._current is not None, "constraint builder not defined"
            self._constraints_builder.add(self._current.build())
            self._current = None

    def characters(self, content: str) -> None:
        # Called any number of times per value; fragments are joined on commit.
        if self._text_tag is not None:
            self._fragments.append(content)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_not_repeated(self, name: str) -> None:
        assert self._current is not None, "constraint builder not defined"
        already_set = {
            tags.GROUP: self._current.is_group_set,
            tags.NAME: self._current.is_name_set,
            tags.SUGGESTED_VERSION: self._current.is_suggested_version_set,
            tags.BECAUSE: self._current.is_reason_set,
        }.get(name)
        if already_set is not None and already_set():
            raise _invalid(f"<{name}> must appear only once under the <{tags.CONSTRAINT}> tag")

    def _commit_text(self, name: str) -> None:
        assert self._current is not None, "constraint builder not defined"
        value = self._prefix + "".join(self._fragments)
        self._text_tag = None
        self._fragments = []
        self._prefix = ""

        if name == tags.GROUP:
            self._current.set_group(value)
        elif name == tags.NAME:
            self._current.set_name(value)
        elif name == tags.SUGGESTED_VERSION:
            self._current.set_suggested_version(value)
        elif name == tags.REJECT:
            self._current.add_rejected_version(value)
        elif name == tags.BECAUSE:
            self._current.set_reason(value)


def _create_secure_parser() -> xml.sax.xmlreader.IncrementalParser:
    parser = xml.sax.make_parser()
    parser.setFeature(feature_namespaces, False)
    parser.setFeature(feature_external_ges, False)
    parser.setFeature(feature_external_pes, False)
    return parser


def read_from_xml(
    stream: BinaryIO,
    *,
    strict: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ConstraintSet:
    """Read a ``ConstraintSet`` from an XML byte stream.

    The stream is closed before this function returns, whatever the
    outcome.  With ``strict=True`` the constraints must also be sorted by
    ``group:name:suggestedVersion``.
    """
    builder = ConstraintSetBuilder(strict=strict)
    handler = ConstraintsHandler(builder)
    try:
        with stream:
            parser = _create_secure_parser()
            parser.setContentHandler(handler)
            parser.setProperty(property_lexical_handler, handler)
            received = False
            while True:
                chunk = stream.read(chunk_size)
                if not chunk:
                    break
                received = True
                parser.feed(chunk)
            if not received:
                raise DependencyConstrainError("File is empty")
            parser.close()
    except (OSError, xml.sax.SAXException, DependencyConstrainError) as exc:
        raise DependencyConstrainError("Unable to read dependency constraints") from exc

    constraints = builder.build()
    logger.debug("Read %d constraint(s) from XML", len(constraints))
    return constraints
