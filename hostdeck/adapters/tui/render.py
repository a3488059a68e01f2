"""
Rich renderables for every view

Rendering is a pure function of router state; nothing here mutates it.
"""
from typing import List, Optional, Sequence, Tuple

from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...core.constants import APP_NAME
from ...domain.browser import (
    Browsing,
    CreateDir,
    CreateFile,
    DeleteConfirm,
    GoToPath,
    RemoteBrowser,
    Rename,
)
from ...domain.credentials import CredentialsManager
from ...domain.forms import BUTTONS, ConnectionForm, Field, FormMode
from ...domain.menu import ModeSelectionMenu
from ...domain.modal import YES, ConfirmationModal
from ...domain.models import AuthType, Connection
from ...domain.router import (
    BrowserView,
    ConnectionFormView,
    ConnectionListView,
    CredentialManagerView,
    ModeMenuView,
    Router,
)
from ...domain.text_input import TextInput

Bindings = Sequence[Tuple[str, str]]

LIST_HELP: Bindings = (
    ("↑/k ↓/j", "move"),
    ("enter", "connect"),
    ("a", "add"),
    ("e", "edit"),
    ("d", "delete"),
    ("c", "credentials"),
    ("q", "quit"),
)
FORM_HELP: Bindings = (
    ("tab/↓", "next"),
    ("shift+tab/↑", "prev"),
    ("←/→", "change"),
    ("enter", "select"),
    ("esc", "cancel"),
)
CREDENTIALS_HELP: Bindings = (
    ("↑/k ↓/j", "move"),
    ("a", "add"),
    ("e", "edit"),
    ("d", "delete"),
    ("esc", "back"),
)
MENU_HELP: Bindings = (("↑/↓", "move"), ("enter", "open"), ("esc", "back"))
MODAL_HELP: Bindings = (("←/→", "choose"), ("enter", "confirm"), ("esc", "cancel"))
BROWSER_HELP: Bindings = (
    ("h/l", "up/open"),
    ("g", "go to"),
    ("n/N", "new file/dir"),
    ("r", "rename"),
    ("d", "delete"),
    ("y", "copy path"),
    ("e", "edit"),
    ("D", "download"),
    (".", "hidden"),
    ("~", "home"),
    ("q", "back"),
)
INPUT_HELP: Bindings = (("enter", "apply"), ("esc", "cancel"))


# ============================================================
# Building Blocks
# ============================================================

def help_line(bindings: Bindings) -> Text:
    text = Text()
    for index, (key, description) in enumerate(bindings):
        if index:
            text.append("  •  ", style="dim")
        text.append(key, style="help.key")
        text.append(f" {description}", style="help.desc")
    return text


def message_line(error: Optional[str], status: Optional[str]) -> Text:
    if error:
        return Text(f"✗ {error}", style="error")
    if status:
        return Text(f"✓ {status}", style="success")
    return Text("")


def header(subtitle: Optional[str] = None) -> Text:
    text = Text(f" {APP_NAME}", style="title")
    if subtitle:
        text.append(f"  {subtitle}", style="subtitle")
    return text


def render_input(text_input: TextInput, focused: bool) -> Text:
    value = text_input.display_value
    if not value and not focused:
        return Text(text_input.placeholder, style="dim")

    text = Text(style="text")
    if not focused:
        text.append(value)
        return text

    cursor = text_input.cursor
    text.append(value[:cursor])
    text.append(value[cursor] if cursor < len(value) else " ", style="reverse")
    text.append(value[cursor + 1:])
    if not value and text_input.placeholder:
        text.append(text_input.placeholder, style="dim")
    return text


def selector(label: str, focused: bool) -> Text:
    style = "field.focused" if focused else "text"
    return Text(f"‹ {label} ›", style=style)


# ============================================================
# Connection List
# ============================================================

def _auth_summary(router: Router, connection: Connection) -> str:
    if connection.auth_type == AuthType.CREDENTIAL:
        credential = router.config.get_credential(connection.credential_id)
        return f"credential: {credential.label}" if credential else "credential: missing"
    return "password"


def render_connection_list(router: Router) -> RenderableType:
    if not router.connections:
        return Panel(
            Text("No connections yet. Press 'a' to add one.", style="muted"),
            border_style="border",
            padding=(1, 2),
        )

    table = Table(box=None, expand=True, header_style="muted", pad_edge=False)
    table.add_column("", width=2)
    table.add_column("Label", ratio=2)
    table.add_column("Address", ratio=3)
    table.add_column("Auth", ratio=2)

    for index, connection in enumerate(router.connections):
        is_selected = index == router.selected
        style = "selected" if is_selected else "text"
        table.add_row(
            Text("❯" if is_selected else " ", style="cursor"),
            Text(f"{connection.icon.glyph}  {connection.label}", style=style),
            Text(connection.address, style=style if is_selected else "muted"),
            Text(_auth_summary(router, connection), style="muted"),
        )
    return Panel(table, title="Connections", title_align="left", border_style="border")


# ============================================================
# Modal
# ============================================================

def render_modal(modal: ConfirmationModal) -> RenderableType:
    buttons = Text()
    buttons.append("  Yes  ", style="button.focused" if modal.selected == YES else "button")
    buttons.append("   ")
    buttons.append("  No  ", style="button" if modal.selected == YES else "button.focused")

    body = Group(
        Text(modal.message, style="text", justify="center"),
        Text(""),
        Align.center(buttons),
    )
    panel = Panel(
        body,
        title=modal.title,
        border_style="border.danger",
        padding=(1, 4),
        width=60,
    )
    return Align.center(panel)


# ============================================================
# Forms
# ============================================================

def _form_value(form, field: Field, focused: bool) -> Text:
    if field in form.inputs:
        return render_input(form.inputs[field], focused)
    if field == Field.AUTH:
        return selector(form.auth_type.value.capitalize(), focused)
    if field == Field.CREDENTIAL:
        credential = form.selected_credential
        if credential is None:
            return Text("none - create one first with 'c'", style="warning")
        return selector(f"{credential.label} ({credential.username})", focused)
    if field == Field.ICON:
        return selector(f"{form.icon.glyph}  {form.icon.display_name}", focused)
    return Text("")


def render_form(form, title: str) -> RenderableType:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(justify="right", min_width=10)
    grid.add_column()

    for field in form.fields:
        if field in BUTTONS:
            continue
        focused = form.focused == field
        label = Text(field.value, style="field.focused" if focused else "field.label")
        grid.add_row(label, _form_value(form, field, focused))

    buttons = Text()
    for button in BUTTONS:
        style = "button.focused" if form.focused == button else "button"
        buttons.append(f"  {button.value}  ", style=style)
        buttons.append("  ")

    parts: List[RenderableType] = [grid, Text(""), buttons]
    if form.error:
        parts.extend([Text(""), message_line(form.error, None)])
    return Panel(Group(*parts), title=title, title_align="left",
                 border_style="border.focused", padding=(1, 2))


def _form_title(form) -> str:
    verb = "Add" if form.mode == FormMode.ADD else "Edit"
    noun = "Connection" if isinstance(form, ConnectionForm) else "Credential"
    return f"{verb} {noun}"


# ============================================================
# Credentials
# ============================================================

def render_credentials(manager: CredentialsManager) -> Tuple[RenderableType, Bindings]:
    if manager.modal is not None:
        return render_modal(manager.modal), MODAL_HELP
    if manager.form is not None:
        return render_form(manager.form, _form_title(manager.form)), FORM_HELP

    if not manager.credentials:
        body: RenderableType = Text("No credentials yet. Press 'a' to add one.", style="muted")
    else:
        table = Table(box=None, expand=True, header_style="muted", pad_edge=False)
        table.add_column("", width=2)
        table.add_column("Label", ratio=1)
        table.add_column("Username", ratio=1)
        for index, credential in enumerate(manager.credentials):
            is_selected = index == manager.selected
            style = "selected" if is_selected else "text"
            table.add_row(
                Text("❯" if is_selected else " ", style="cursor"),
                Text(credential.label, style=style),
                Text(credential.username, style="muted"),
            )
        body = table

    panel = Panel(
        Group(body, Text(""), message_line(manager.error, manager.status)),
        title="Credentials",
        title_align="left",
        border_style="border",
    )
    return panel, CREDENTIALS_HELP


# ============================================================
# Mode Menu
# ============================================================

def render_menu(menu: ModeSelectionMenu, connection: Connection) -> RenderableType:
    grid = Table.grid(padding=(0, 2))
    grid.add_column(width=2)
    grid.add_column()
    grid.add_column()
    for index, mode in enumerate(menu.OPTIONS):
        is_selected = index == menu.selected
        grid.add_row(
            Text("❯" if is_selected else " ", style="cursor"),
            Text(mode.name, style="selected" if is_selected else "text"),
            Text(mode.description, style="muted"),
        )
    return Panel(grid, title=f"Connect to {connection.label}", title_align="left",
                 subtitle=connection.address, border_style="border.focused", padding=(1, 2))


# ============================================================
# Remote Browser
# ============================================================

_PROMPTS = {
    GoToPath: "Go to",
    CreateFile: "New file",
    CreateDir: "New directory",
    Rename: "Rename to",
}


def _browser_prompt(browser: RemoteBrowser) -> Text:
    state = browser.state
    if isinstance(state, DeleteConfirm):
        kind = "directory" if state.entry.is_dir else "file"
        return Text(f"Delete {kind} '{state.entry.name}'? (y/N)", style="warning")
    label = _PROMPTS.get(type(state))
    if label is None:
        return Text("")
    text = Text(f"{label}: ", style="accent")
    text.append_text(render_input(state.input, True))
    return text


def render_browser(browser: RemoteBrowser) -> RenderableType:
    path_line = Text(" ", style="text")
    path_line.append(browser.current_path, style="accent")
    if browser.show_hidden:
        path_line.append("  (showing hidden)", style="muted")
    if browser.entries:
        path_line.append(f"  {browser.selected + 1}/{len(browser.entries)}", style="dim")

    table = Table(box=None, expand=True, header_style="muted", pad_edge=False)
    table.add_column("", width=2)
    table.add_column("Name", ratio=3, no_wrap=True, overflow="ellipsis")
    table.add_column("Size", justify="right", width=10)
    table.add_column("Permissions", width=11)
    table.add_column("Modified", width=16)

    for offset, entry in enumerate(browser.visible_entries):
        index = browser.scroll_offset + offset
        is_selected = index == browser.selected
        name_style = "directory" if entry.is_dir else "file"
        if is_selected:
            name_style = "selected"
        table.add_row(
            Text("❯" if is_selected else " ", style="cursor"),
            Text(entry.name + ("/" if entry.is_dir else ""), style=name_style),
            Text(entry.display_size, style="muted"),
            Text(entry.permissions, style="dim"),
            Text(entry.display_modified, style="dim"),
        )

    body: RenderableType = table
    if not browser.entries:
        body = Text("  (empty directory)", style="muted")

    return Group(
        Panel(Group(path_line, Text(""), body), title="SFTP", title_align="left", border_style="border"),
        _browser_prompt(browser),
        message_line(browser.error, browser.status),
    )


# ============================================================
# Screen
# ============================================================

def render(router: Router) -> RenderableType:
    """Whole-screen renderable for the router's current state"""
    view = router.view
    error, status = router.error, router.status

    if router.modal is not None:
        body, bindings = render_modal(router.modal), MODAL_HELP
        subtitle = "Confirm"
    elif isinstance(view, ConnectionListView):
        body, bindings = render_connection_list(router), LIST_HELP
        subtitle = f"{len(router.connections)} connection(s)"
    elif isinstance(view, ConnectionFormView):
        body, bindings = render_form(view.form, _form_title(view.form)), FORM_HELP
        subtitle = None
    elif isinstance(view, CredentialManagerView):
        body, bindings = render_credentials(view.manager)
        subtitle = "Credentials"
    elif isinstance(view, ModeMenuView):
        body, bindings = render_menu(view.menu, view.connection), MENU_HELP
        subtitle = None
    elif isinstance(view, BrowserView):
        browser = view.browser
        body = render_browser(browser)
        bindings = BROWSER_HELP if isinstance(browser.state, Browsing) else INPUT_HELP
        subtitle = "Remote files"
        error = status = None
    else:
        body, bindings, subtitle = Text(""), (), None

    return Group(
        header(subtitle),
        Text(""),
        body,
        message_line(error, status),
        help_line(bindings),
    )

