"""Component persister - object tree to server-control markup.

Walks a component, its properties and its children, asking the services
context for tag prefixes and descriptors. Per property, metadata alone
decides between an attribute, a dash-prefixed attribute group, nested
markup, or nothing at all.
"""

import html
import io
from typing import Any, Optional

from ..core.config import Settings, get_settings
from ..core.errors import (
    ConversionError,
    DepthExceeded,
    PreconditionError,
    ResolutionError,
    StructuralConflict,
)
from ..core.logging_config import LogContext, get_logger
from ..markup.writer import MarkupWriter, TextSink
from ..metadata.components import Component
from ..metadata.types import (
    INNER_MODES,
    SOLE_INNER_MODES,
    PersistenceMode,
    PropertyDescriptor,
    SerializationVisibility,
)
from ..services.registry import ServiceRegistry
from ..services.types import ServiceKind
from .values import InnerValue, InnerValueKind

logger = get_logger(__name__)


def _require(value: Any, name: str) -> None:
    if value is None:
        raise PreconditionError(f"{name} is required")


def _join(prefix: str, name: str) -> str:
    return f"{prefix}-{name}" if prefix else name


class ControlPersister:
    """
    Persists components as tagged markup.

    Holds configuration only; all per-call state (writer, services, depth)
    is passed explicitly, so one persister can serve concurrent calls on
    independent writers.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def create_writer(self, sink: TextSink) -> MarkupWriter:
        """Wrap a text sink, reusing it when it already is a MarkupWriter."""
        if isinstance(sink, MarkupWriter):
            return sink
        return MarkupWriter(
            sink,
            indent_text=self.settings.indent_text,
            newline=self.settings.newline,
            encode_attributes=self.settings.encode_attributes,
        )

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def persist_control(
        self,
        sink: TextSink,
        control: Any,
        services: ServiceRegistry,
        run_at_server: Optional[bool] = None,
    ) -> None:
        """
        Write ``control`` and everything nested inside it as one tag.

        Args:
            sink: Text sink or MarkupWriter
            control: Root component
            services: Services context supplying prefixes and metadata
            run_at_server: Emit ``runat="server"`` (defaults to settings)

        Raises:
            PreconditionError: If an argument is missing
            PersistenceError: Any other failure; output already written is undefined
        """
        _require(sink, "sink")
        _require(control, "control")
        _require(services, "services")

        if run_at_server is None:
            run_at_server = self.settings.run_at_server

        writer = self.create_writer(sink)
        with LogContext(root=type(control).__name__):
            self.persist_object(writer, control, services, run_at_server)

    def persist_control_to_string(self, control: Any, services: ServiceRegistry) -> str:
        """Persist ``control`` and return the produced markup."""
        sink = io.StringIO()
        writer = self.create_writer(sink)
        self.persist_control(writer, control, services)
        writer.flush()
        return sink.getvalue()

    def persist_inner_properties(
        self, sink: TextSink, component: Any, services: ServiceRegistry
    ) -> None:
        """Write only the inner content of ``component``, for callers owning the outer tag."""
        _require(sink, "sink")
        _require(component, "component")
        _require(services, "services")

        if not isinstance(component, Component):
            raise PreconditionError(
                f"Only Component instances can be persisted, got {type(component).__name__}"
            )

        writer = self.create_writer(sink)
        with LogContext(root=type(component).__name__):
            self.persist_inner_content(writer, component, services)
        writer.flush()

    def persist_inner_properties_to_string(self, component: Any, services: ServiceRegistry) -> str:
        """Persist the inner content of ``component`` and return it."""
        sink = io.StringIO()
        self.persist_inner_properties(sink, component, services)
        return sink.getvalue()

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def persist_object(
        self,
        writer: MarkupWriter,
        instance: Any,
        services: ServiceRegistry,
        run_at_server: bool,
        depth: int = 0,
    ) -> None:
        """Write one complete tag for ``instance``."""
        depth += 1
        if depth > self.settings.max_depth:
            logger.error("depth_exceeded", depth=depth, limit=self.settings.max_depth)
            raise DepthExceeded(depth, self.settings.max_depth)

        tag = self._tag_name(services, type(instance), type(instance).__name__)
        logger.debug("persist_object", tag=tag, depth=depth)

        writer.write_begin_tag(tag)

        properties = services.require(ServiceKind.PROPERTIES)
        for prop in properties.describe_properties(instance):
            self.try_emit_attribute(prop, instance, writer, services, depth=depth)

        if run_at_server:
            writer.write_attribute("runat", "server")

        self._emit_events(writer, instance, services)

        # The begin tag is closed differently for each form, so decide first
        if self.has_inner_content(instance, services):
            writer.write_full_begin_tag_close()
            with writer.indented():
                self.persist_inner_content(writer, instance, services, depth)
            writer.write_end_tag(tag)
        else:
            writer.write_self_closing_tag_close()

        writer.write_line()
        writer.flush()

    def try_emit_attribute(
        self,
        descriptor: PropertyDescriptor,
        owner: Any,
        writer: MarkupWriter,
        services: ServiceRegistry,
        name_prefix: str = "",
        depth: int = 0,
    ) -> bool:
        """
        Add ``descriptor``'s attribute(s) to the open begin tag.

        Content properties contribute their own child properties, named
        ``Parent-Child`` at any depth. Inner-content modes contribute nothing
        here.

        Raises:
            DepthExceeded: If Content values nest deeper than max_depth

        Returns:
            True if at least one attribute was written
        """
        if (
            descriptor.visibility is SerializationVisibility.HIDDEN
            or descriptor.design_time_only
            or descriptor.read_only
            or not descriptor.has_non_default_value(owner)
        ):
            return False

        if descriptor.visibility is SerializationVisibility.CONTENT:
            depth += 1
            if depth > self.settings.max_depth:
                logger.error("depth_exceeded", depth=depth, limit=self.settings.max_depth)
                raise DepthExceeded(depth, self.settings.max_depth)

            value = descriptor.get_value(owner)
            child_prefix = _join(name_prefix, descriptor.name)
            properties = services.require(ServiceKind.PROPERTIES)

            found = False
            for child in properties.describe_child_properties(descriptor, value):
                if self.try_emit_attribute(child, value, writer, services, child_prefix, depth):
                    found = True
            return found

        if descriptor.effective_mode is not PersistenceMode.ATTRIBUTE:
            return False
        if not descriptor.can_convert_to_string:
            return False

        text = self._convert(descriptor, descriptor.get_value(owner))
        writer.write_attribute(_join(name_prefix, descriptor.name), text)
        return True

    def has_inner_content(self, instance: Any, services: ServiceRegistry) -> bool:
        """
        Lookahead: will ``instance`` need a full begin/end tag pair?

        Read-only and default-value checks are skipped, so this may
        over-predict (an empty element) but never under-predicts.
        """
        if self._persists_children(instance):
            return bool(instance.children)

        properties = services.require(ServiceKind.PROPERTIES)
        return any(
            self._is_inner_candidate(prop) for prop in properties.describe_properties(instance)
        )

    def persist_inner_content(
        self,
        writer: MarkupWriter,
        instance: Any,
        services: ServiceRegistry,
        depth: int = 0,
    ) -> None:
        """Write the content between ``instance``'s begin and end tags."""
        if self._persists_children(instance):
            if not instance.children:
                return
            logger.debug("inner_content", branch="children", count=len(instance.children))
            with writer.indented():
                if not writer.at_line_start:
                    writer.write_line()
                for child in instance.children:
                    self.persist_object(writer, child, services, False, depth)
            return

        properties = services.require(ServiceKind.PROPERTIES)
        candidates = [
            prop for prop in properties.describe_properties(instance)
            if self._is_inner_candidate(prop)
        ]
        logger.debug("inner_content", branch="properties", count=len(candidates))

        sole = [prop.name for prop in candidates if self._is_sole_content(prop)]
        if len(sole) > 1:
            logger.error("structural_conflict", properties=sole)
            raise StructuralConflict(
                f"{type(instance).__name__} declares more than one default inner property: "
                + ", ".join(sole),
                sole[1],
            )

        content_started = False
        for prop in candidates:
            mode = prop.effective_mode

            # Encoded text without a string converter is skipped
            if mode is PersistenceMode.ENCODED_INNER_DEFAULT_PROPERTY and not prop.can_convert_to_string:
                continue

            if mode in SOLE_INNER_MODES and content_started:
                logger.error("structural_conflict", properties=[prop.name])
                raise StructuralConflict(
                    f"{type(instance).__name__} has inner properties in addition to "
                    f"the default inner property {prop.name}",
                    prop.name,
                )

            if mode is PersistenceMode.ENCODED_INNER_DEFAULT_PROPERTY:
                text = self._convert(prop, prop.get_value(instance))
                writer.write(html.escape(text))
                # Encoded text is the whole content, no trailing line break
                return

            if mode is PersistenceMode.INNER_DEFAULT_PROPERTY:
                self.persist_inner_value(
                    prop, prop.get_value(instance), writer, services, True, depth
                )
                break

            self.persist_inner_value(prop, prop.get_value(instance), writer, services, False, depth)
            content_started = True

        if not writer.at_line_start:
            writer.write_line()

    def persist_inner_value(
        self,
        descriptor: PropertyDescriptor,
        value: Any,
        writer: MarkupWriter,
        services: ServiceRegistry,
        is_default: bool,
        depth: int = 0,
    ) -> None:
        """Write one inner property value, shaped by its InnerValue kind."""
        tag = self._tag_name(services, descriptor.declared_type, descriptor.name)
        inner = InnerValue.classify(value)

        if inner.is_empty and (is_default or inner.kind is InnerValueKind.COLLECTION):
            return

        if not writer.at_line_start:
            writer.write_line()

        if inner.kind is InnerValueKind.NULL:
            writer.write_begin_tag(tag)
            writer.write_self_closing_tag_close()
            return

        if inner.kind is InnerValueKind.SCALAR:
            text = html.escape(inner.value)
            if is_default:
                writer.write(text)
            else:
                writer.write_full_begin_tag(tag)
                writer.write(text)
                writer.write_end_tag(tag)
            return

        if inner.kind is InnerValueKind.COLLECTION:
            if is_default:
                for item in inner.value:
                    self.persist_object(writer, item, services, False, depth)
                return

            writer.write_full_begin_tag(tag)
            with writer.indented():
                writer.write_line()
                for item in inner.value:
                    self.persist_object(writer, item, services, False, depth)
            writer.write_end_tag(tag)
            return

        # Structured values only contribute their flat attribute set
        writer.write_begin_tag(tag)
        properties = services.require(ServiceKind.PROPERTIES)
        for prop in properties.describe_properties(inner.value):
            self.try_emit_attribute(prop, inner.value, writer, services, depth=depth)
        writer.write_self_closing_tag_close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _persists_children(instance: Any) -> bool:
        return isinstance(instance, Component) and instance.persist_children

    @staticmethod
    def _is_inner_candidate(descriptor: PropertyDescriptor) -> bool:
        # Shared by the lookahead and the inner-content scan; they must agree
        return (
            descriptor.visibility is SerializationVisibility.VISIBLE
            and not descriptor.design_time_only
            and descriptor.converter is not None
            and descriptor.effective_mode in INNER_MODES
        )

    @staticmethod
    def _is_sole_content(descriptor: PropertyDescriptor) -> bool:
        if descriptor.effective_mode is PersistenceMode.ENCODED_INNER_DEFAULT_PROPERTY:
            return descriptor.can_convert_to_string
        return descriptor.effective_mode in SOLE_INNER_MODES

    def _tag_name(self, services: ServiceRegistry, type_: type, name: str) -> str:
        resolver = services.require(ServiceKind.TAG_PREFIXES)
        try:
            prefix = resolver.resolve_prefix(type_)
        except ResolutionError:
            logger.error("resolution_failed", type=getattr(type_, "__name__", str(type_)))
            raise

        if not prefix:
            logger.error("resolution_failed", type=getattr(type_, "__name__", str(type_)))
            raise ResolutionError(f"No tag prefix available for {type_.__name__}")
        return f"{prefix}:{name}"

    def _convert(self, descriptor: PropertyDescriptor, value: Any) -> str:
        try:
            text = descriptor.converter.to_string(value)
        except ConversionError:
            raise
        except Exception as e:
            logger.error("conversion_failed", property=descriptor.name, error=str(e))
            raise ConversionError(
                f"Could not convert {descriptor.name} to string: {e}", descriptor.name
            ) from e

        if not isinstance(text, str):
            logger.error("conversion_failed", property=descriptor.name, error="not a string")
            raise ConversionError(
                f"Converter for {descriptor.name} returned {type(text).__name__}, not str",
                descriptor.name,
            )
        return text

    def _emit_events(self, writer: MarkupWriter, instance: Any, services: ServiceRegistry) -> None:
        events = services.get(ServiceKind.EVENTS)
        if events is None:
            return

        descriptors = events.describe_events(instance)
        if descriptors is None:
            return

        for event in descriptors:
            prop = events.resolve_handler_property(event)
            if prop is None:
                continue
            if (
                prop.visibility is not SerializationVisibility.VISIBLE
                or prop.design_time_only
                or prop.read_only
            ):
                continue

            handler = prop.get_value(instance)
            if not isinstance(handler, str) or not prop.has_non_default_value(instance):
                continue
            writer.write_attribute("On" + prop.name, handler)
