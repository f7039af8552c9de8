"""Terminal entry point for the modal editor."""

from __future__ import annotations

import argparse

from textual.app import App, ComposeResult

from .widget import ModalEditor


class ModalEditorApp(App):
    """Full-screen TUI app that wraps the ModalEditor widget."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #editor {
        height: 1fr;
    }
    """

    TITLE = "vimlet"
    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def compose(self) -> ComposeResult:
        yield ModalEditor(id="editor")

    def on_mount(self) -> None:
        self.query_one("#editor").focus()

    def on_modal_editor_quit(self, event: ModalEditor.Quit) -> None:
        self.log.info("editor quit")
        self.exit()


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="vimlet",
        description="Minimal modal text editor with vi-style keybindings",
    )
    parser.parse_args()

    app = ModalEditorApp()
    app.run()


if __name__ == "__main__":
    main()
