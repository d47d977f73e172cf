"""Tests for whole-component persistence and the entry points."""

import io

import pytest
from returns.result import Failure, Success

from markup_persist import (
    persist_control,
    persist_control_to_string,
    persist_inner_properties,
    persist_inner_properties_to_string,
    persist_sited_control,
    try_persist_control,
)
from markup_persist.core import (
    DepthExceeded,
    PersistenceError,
    PreconditionError,
    ResolutionError,
    create_services,
)
from markup_persist.core.config import Settings
from markup_persist.markup import MarkupWriter
from markup_persist.metadata import (
    NO_STRING_CONVERTER,
    Component,
    Persistable,
    PropertyDescriptor,
    SerializationVisibility,
    TagPrefixTable,
)
from markup_persist.persistence import ControlPersister
from markup_persist.services import ServiceKind
from tests.controls import (
    Bin,
    BoundField,
    Button,
    DropDownList,
    FontInfo,
    GridView,
    Label,
    ListItem,
    Literal,
    Panel,
    Style,
)


class Link(Persistable):
    properties = (
        PropertyDescriptor(name="Name", declared_type=str),
        PropertyDescriptor(
            name="Next",
            visibility=SerializationVisibility.CONTENT,
            converter=NO_STRING_CONVERTER,
        ),
    )


class Chain(Component):
    properties = (
        PropertyDescriptor(
            name="Head",
            declared_type=Link,
            visibility=SerializationVisibility.CONTENT,
            converter=NO_STRING_CONVERTER,
        ),
    )


class Factoried(Component):
    properties = (
        PropertyDescriptor(name="Mode", declared_type=str, default_factory=lambda: "auto"),
    )


# ============================================================================
# Tag forms
# ============================================================================

@pytest.mark.unit
def test_empty_component_self_closes(persister, services):
    """Test a component with nothing to persist is one self-closing tag."""
    assert persister.persist_control_to_string(Label(), services) == '<asp:Label runat="server" />\n'


@pytest.mark.unit
def test_attributes_in_declaration_order(persister, services):
    """Test attribute order follows descriptor order, not assignment order."""
    label = Label(text="Hi", CssClass="title", ID="lbl")
    label.Font.Size = "12pt"

    assert persister.persist_control_to_string(label, services) == (
        '<asp:Label ID="lbl" CssClass="title" Font-Size="12pt" Text="Hi" runat="server" />\n'
    )


@pytest.mark.unit
def test_suppressed_properties_never_written(persister, services):
    """Test hidden, design-time-only and read-only properties are omitted."""
    label = Label(ID="x", Locked=True, ViewState="state")
    text = persister.persist_control_to_string(label, services)

    assert "Locked" not in text
    assert "ViewState" not in text
    assert "ClientID" not in text


@pytest.mark.unit
def test_run_at_server_optional(persister, services, sink):
    """Test the server marker can be left out."""
    persister.persist_control(sink, Label(text="x"), services, run_at_server=False)
    assert sink.getvalue() == '<asp:Label Text="x" />\n'


@pytest.mark.unit
def test_encoded_inner_text(persister, services):
    """Test encoded default content sits inside the tag with no attribute."""
    assert persister.persist_control_to_string(Literal(text="<b>hi</b>"), services) == (
        '<asp:Literal runat="server">&lt;b&gt;hi&lt;/b&gt;</asp:Literal>\n'
    )


@pytest.mark.unit
def test_panel_with_children(persister, services):
    """Test child components are nested without the server marker."""
    panel = Panel(ID="p").add(Label(text="a"), Label(text="b"))

    assert persister.persist_control_to_string(panel, services) == (
        '<asp:Panel ID="p" runat="server">\n'
        '\t\t<asp:Label Text="a" />\n'
        '\t\t<asp:Label Text="b" />\n'
        '</asp:Panel>\n'
    )


@pytest.mark.unit
def test_drop_down_list(persister, services):
    """Test default collection content of a list control."""
    ddl = DropDownList(ID="d", items=[ListItem(Text="One", Value="1"), ListItem(Text="Two", Value="2")])

    assert persister.persist_control_to_string(ddl, services) == (
        '<asp:DropDownList ID="d" runat="server">\n'
        '\t<asp:ListItem Text="One" Value="1" />\n'
        '\t<asp:ListItem Text="Two" Value="2" />\n'
        '</asp:DropDownList>\n'
    )


@pytest.mark.unit
def test_grid_view(persister, services):
    """Test multiple inner properties accumulate."""
    grid = GridView(
        ID="g",
        Caption="People",
        columns=[BoundField(DataField="Name", HeaderText="Name"), BoundField(DataField="Age")],
        header_style=Style(BackColor="Navy"),
    )

    assert persister.persist_control_to_string(grid, services) == (
        '<asp:GridView ID="g" Caption="People" runat="server">\n'
        '\t<asp:Columns>\n'
        '\t\t<asp:BoundField DataField="Name" HeaderText="Name" />\n'
        '\t\t<asp:BoundField DataField="Age" />\n'
        '\t</asp:Columns>\n'
        '\t<asp:HeaderStyle BackColor="Navy" />\n'
        '</asp:GridView>\n'
    )


@pytest.mark.unit
def test_prefixes_per_type(persister):
    """Test tag prefixes resolve per component and property type."""
    services = create_services({GridView: "ui", BoundField: "f", list: "col", Style: "st"})
    grid = GridView(columns=[BoundField(DataField="A")])

    assert persister.persist_control_to_string(grid, services) == (
        '<ui:GridView runat="server">\n'
        '\t<col:Columns>\n'
        '\t\t<f:BoundField DataField="A" />\n'
        '\t</col:Columns>\n'
        '\t<st:HeaderStyle />\n'
        '</ui:GridView>\n'
    )


@pytest.mark.unit
def test_custom_indent_settings(services):
    """Test writer settings flow from configuration."""
    persister = ControlPersister(Settings(indent_text="  ", run_at_server=False))
    panel = Panel().add(Label(text="a"))

    assert persister.persist_control_to_string(panel, services) == (
        '<asp:Panel>\n'
        '    <asp:Label Text="a" />\n'
        '</asp:Panel>\n'
    )


@pytest.mark.unit
def test_plain_persistable_root(persister, services):
    """Test non-Component values persist their attributes only."""
    assert persister.persist_control_to_string(Bin(Label="x"), services) == (
        '<asp:Bin Label="x" runat="server" />\n'
    )


# ============================================================================
# Events
# ============================================================================

@pytest.mark.unit
def test_bound_events_written(persister, services):
    """Test bound handlers become On<Event> attributes after runat."""
    button = Button(ID="b", text="Go")
    button.bind_event("Click", "b_Click")

    assert persister.persist_control_to_string(button, services) == (
        '<asp:Button ID="b" Text="Go" runat="server" OnClick="b_Click" />\n'
    )


@pytest.mark.unit
def test_events_skipped_without_binding_service(persister, services_without_events):
    """Test missing event metadata is silently skipped."""
    button = Button(ID="b")
    button.bind_event("Click", "b_Click")

    assert persister.persist_control_to_string(button, services_without_events) == (
        '<asp:Button ID="b" runat="server" />\n'
    )


# ============================================================================
# Failures
# ============================================================================

@pytest.mark.unit
def test_missing_prefix_raises(persister, bare_services, sink):
    """Test an unresolvable tag prefix aborts before writing."""
    with pytest.raises(ResolutionError):
        persister.persist_control(sink, Label(), bare_services)

    assert sink.getvalue() == ""


@pytest.mark.unit
def test_missing_property_service_raises(persister, sink):
    """Test a services context without property metadata fails."""
    services = create_services(default_prefix="asp")
    services.unregister(ServiceKind.PROPERTIES)

    with pytest.raises(ResolutionError):
        persister.persist_control(sink, Label(), services)


@pytest.mark.unit
def test_depth_limit(services):
    """Test nesting beyond the configured depth fails with DepthExceeded."""
    persister = ControlPersister(Settings(max_depth=2))
    writer = MarkupWriter(io.StringIO())
    tree = Panel().add(Panel().add(Panel()))

    with pytest.raises(DepthExceeded) as excinfo:
        persister.persist_control(writer, tree, services)

    assert excinfo.value.depth == 3
    assert excinfo.value.limit == 2
    assert writer.indent == 0


@pytest.mark.unit
def test_cycle_hits_depth_limit(services):
    """Test a cyclic tree terminates."""
    persister = ControlPersister(Settings(max_depth=10))
    panel = Panel()
    panel.add(panel)

    with pytest.raises(DepthExceeded):
        persister.persist_control_to_string(panel, services)


@pytest.mark.unit
def test_content_cycle_hits_depth_limit(services):
    """Test a self-referencing content value ends in DepthExceeded."""
    persister = ControlPersister(Settings(max_depth=10))
    link = Link(Name="a")
    link.Next = link

    with pytest.raises(PersistenceError) as excinfo:
        persister.persist_control_to_string(Chain(Head=link), services)

    assert isinstance(excinfo.value, DepthExceeded)
    assert excinfo.value.limit == 10

    failure = try_persist_control(Chain(Head=link), services, Settings(max_depth=10))
    assert isinstance(failure, Failure)
    assert failure.failure().kind == "DepthExceeded"


@pytest.mark.unit
def test_content_chain_within_limit(persister, services):
    """Test acyclic content values flatten to nested dash names."""
    chain = Chain(Head=Link(Name="a", Next=Link(Name="b")))

    assert persister.persist_control_to_string(chain, services) == (
        '<asp:Chain Head-Name="a" Head-Next-Name="b" runat="server" />\n'
    )


@pytest.mark.unit
def test_factory_default_is_not_written(persister, services):
    """Test a value equal to its factory default is suppressed."""
    assert persister.persist_control_to_string(Factoried(), services) == (
        '<asp:Factoried runat="server" />\n'
    )
    assert persister.persist_control_to_string(Factoried(Mode="manual"), services) == (
        '<asp:Factoried Mode="manual" runat="server" />\n'
    )


@pytest.mark.unit
@pytest.mark.parametrize("args", [
    (None, Label(), "services"),
    (io.StringIO(), None, "services"),
    (io.StringIO(), Label(), None),
])
def test_preconditions(persister, services, args):
    """Test missing arguments fail fast."""
    sink, control, context = args
    if context == "services":
        context = services

    with pytest.raises(PreconditionError):
        persister.persist_control(sink, control, context)


# ============================================================================
# Entry points
# ============================================================================

@pytest.mark.unit
def test_persist_control_function(services, sink):
    """Test module-level entry point writes to a sink."""
    persist_control(sink, Label(text="x"), services)
    assert sink.getvalue() == '<asp:Label Text="x" runat="server" />\n'


@pytest.mark.unit
def test_persist_control_to_string_function(services):
    """Test module-level string entry point."""
    assert persist_control_to_string(Label(), services) == '<asp:Label runat="server" />\n'


@pytest.mark.unit
def test_persist_inner_properties(services, sink):
    """Test persisting only a component's inner content."""
    panel = Panel(ID="p").add(Label(text="a"))
    persist_inner_properties(sink, panel, services)

    assert sink.getvalue() == '\t<asp:Label Text="a" />\n'
    assert persist_inner_properties_to_string(Literal(text="a&b"), services) == "a&amp;b"


@pytest.mark.unit
def test_persist_inner_properties_requires_component(services, sink):
    """Test only components can have inner content persisted."""
    with pytest.raises(PreconditionError):
        persist_inner_properties(sink, FontInfo(), services)

    with pytest.raises(PreconditionError):
        persist_inner_properties_to_string(None, services)


@pytest.mark.unit
def test_persist_sited_control(services):
    """Test sited controls use their own services context."""
    assert persist_sited_control(Label(text="x")) == ""
    assert persist_sited_control(Label(text="x", site=services)) == (
        '<asp:Label Text="x" runat="server" />\n'
    )

    with pytest.raises(PreconditionError):
        persist_sited_control(None)


@pytest.mark.unit
def test_try_persist_control(services, bare_services):
    """Test Result-pattern entry point."""
    result = try_persist_control(Label(), services)
    assert result == Success('<asp:Label runat="server" />\n')

    failure = try_persist_control(Label(), bare_services)
    assert isinstance(failure, Failure)
    assert failure.failure().kind == "ResolutionError"
    assert "Label" in failure.failure().message


@pytest.mark.unit
def test_persister_is_reusable(persister, services):
    """Test repeated calls produce identical output."""
    grid = GridView(columns=[BoundField(DataField="A")])

    first = persister.persist_control_to_string(grid, services)
    second = persister.persist_control_to_string(grid, services)
    assert first == second
