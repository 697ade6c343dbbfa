from __future__ import annotations

import logging

import requests
from textual import work
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Input, Static, TextArea
from rich.console import Group
from rich.table import Table

from config import DEFAULT_DURATION_MINUTES, configure_logging
from metrics import TypingScore
from passages import PassageStore
from render import highlight_reference, highlight_typed, preview
from session import NoTestAvailable, TypingSession, format_countdown
from stats import HistoryRecord, HistoryStore, humanize_timestamp, summarize
from wikipedia import fetch_random_passage


logger = logging.getLogger(__name__)


class ConfirmScreen(ModalScreen[bool]):
    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, question: str) -> None:
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm"):
            yield Static(self.question, id="confirm-question")
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete", id="yes", variant="error")
                yield Button("Cancel", id="no")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")

    def action_cancel(self) -> None:
        self.dismiss(False)


class HomeScreen(Screen):
    BINDINGS = [("q", "quit", "Quit")]

    @property
    def passages(self) -> PassageStore:
        return self.app.passages

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="home"):
            yield Static("Typing Test", id="title")
            yield Static("Paste a passage, pick a time limit, and type it word for word.", id="subtitle")
            yield TextArea("", id="passage-input")
            with Horizontal(id="time-row"):
                yield Static("Minutes:", id="time-label")
                yield Input(str(DEFAULT_DURATION_MINUTES), id="time-input", type="integer")
            with Horizontal(id="home-buttons"):
                yield Button("Start Test", id="start", variant="success")
                yield Button("Save Passage", id="save")
                yield Button("Random Passage", id="random")
                yield Button("History", id="history")
                yield Button("Quit", id="quit", variant="error")
            yield Static("Saved Passages", classes="section-title")
            yield Vertical(id="saved-passages")
        yield Footer()

    async def on_screen_resume(self) -> None:
        await self._refresh_passages()

    async def _refresh_passages(self) -> None:
        box = self.query_one("#saved-passages", Vertical)
        await box.remove_children()
        rows = []
        for index, passage in enumerate(self.passages.load()):
            rows.append(
                Horizontal(
                    Button(preview(passage), id=f"use-{index}", classes="passage-use"),
                    Button("Delete", id=f"delete-{index}", classes="passage-delete", variant="error"),
                    classes="passage-row",
                )
            )
        if rows:
            await box.mount_all(rows)
        else:
            await box.mount(Static("No saved passages yet.", classes="muted"))

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == "start":
            self._start_test()
        elif button_id == "save":
            await self._save_passage()
        elif button_id == "random":
            self._load_random_passage()
        elif button_id == "history":
            self.app.push_screen(HistoryScreen())
        elif button_id == "quit":
            self.app.exit()
        elif button_id.startswith("use-"):
            self._use_passage(int(button_id.removeprefix("use-")))
        elif button_id.startswith("delete-"):
            self._confirm_delete(int(button_id.removeprefix("delete-")))

    def action_quit(self) -> None:
        self.app.exit()

    def _passage_text(self) -> str:
        return self.query_one("#passage-input", TextArea).text.strip()

    def _start_test(self) -> None:
        raw_minutes = self.query_one("#time-input", Input).value.strip()
        try:
            session = TypingSession(self._passage_text(), int(raw_minutes) if raw_minutes else 0)
        except (NoTestAvailable, ValueError) as exc:
            self.notify(f"No test available: {exc}", severity="error")
            return
        self.app.push_screen(ExamScreen(session))

    async def _save_passage(self) -> None:
        try:
            self.passages.add(self._passage_text())
        except ValueError as exc:
            self.notify(str(exc), severity="warning")
            return
        self.query_one("#passage-input", TextArea).load_text("")
        await self._refresh_passages()

    def _use_passage(self, index: int) -> None:
        try:
            passage = self.passages.get(index)
        except IndexError:
            self.notify("That passage no longer exists.", severity="warning")
            return
        self.query_one("#passage-input", TextArea).load_text(passage)

    def _confirm_delete(self, index: int) -> None:
        async def _on_answer(confirmed: bool | None) -> None:
            if not confirmed:
                return
            try:
                self.passages.delete(index)
            except IndexError:
                self.notify("That passage no longer exists.", severity="warning")
            await self._refresh_passages()

        self.app.push_screen(ConfirmScreen("Delete this passage?"), _on_answer)

    @work(thread=True, exclusive=True)
    def _load_random_passage(self) -> None:
        self.app.call_from_thread(self.notify, "Fetching a random passage...")
        try:
            article = fetch_random_passage()
        except (requests.RequestException, LookupError) as exc:
            logger.warning("Random passage fetch failed: %s", exc)
            self.app.call_from_thread(self.notify, "Could not fetch a passage.", severity="error")
            return
        self.app.call_from_thread(
            self.query_one("#passage-input", TextArea).load_text, article.text
        )
        self.app.call_from_thread(self.notify, f"Loaded: {article.title}")


class ExamScreen(Screen):
    BINDINGS = [("ctrl+s", "submit", "Submit"), ("escape", "back", "Back")]

    def __init__(self, session: TypingSession) -> None:
        super().__init__()
        self.session = session
        self._submitting = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="exam"):
            yield Static(format_countdown(self.session.duration_minutes * 60), id="timer")
            yield Static(self.session.passage, id="reference-text")
            yield TextArea("", id="typing-area")
            with Horizontal(id="exam-buttons"):
                yield Button("Submit", id="submit", variant="primary")
                yield Button("Back", id="back")
        yield Footer()

    def on_mount(self) -> None:
        self.session.start()
        self._ticker = self.set_interval(1.0, self._tick)
        self.query_one("#typing-area", TextArea).focus()

    def _tick(self) -> None:
        self.query_one("#timer", Static).update(format_countdown(self.session.remaining_seconds()))
        if self.session.is_expired():
            self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.action_submit()
        elif event.button.id == "back":
            self.action_back()

    def action_back(self) -> None:
        if self._submitting:
            return
        self._ticker.stop()
        self.app.pop_screen()

    def action_submit(self) -> None:
        if self._submitting:
            return
        self._submitting = True
        self._ticker.stop()
        typing_area = self.query_one("#typing-area", TextArea)
        typing_area.disabled = True
        submit = self.query_one("#submit", Button)
        submit.disabled = True
        submit.label = "Processing..."
        self._score(typing_area.text.strip())

    @work(thread=True, exclusive=True)
    def _score(self, typed_text: str) -> None:
        score = self.session.submit(typed_text)
        self.app.history.append(HistoryRecord.from_score(self.session.passage, typed_text, score))
        self.app.call_from_thread(self._show_result, score)

    def _show_result(self, score: TypingScore) -> None:
        self.app.switch_screen(ResultScreen(self.session, score))


class ResultScreen(Screen):
    BINDINGS = [("r", "retry", "Retry"), ("escape", "home", "Home")]

    def __init__(self, session: TypingSession, score: TypingScore) -> None:
        super().__init__()
        self.session = session
        self.score = score

    def compose(self) -> ComposeResult:
        score = self.score
        alignment = score.alignment
        yield Header()
        with VerticalScroll(id="result"):
            yield Static("Result", id="result-title")
            yield Static(f"Gross WPM: {score.gross_wpm:.2f}", id="result-gross")
            yield Static(f"Net WPM: {score.net_wpm:.2f}", id="result-net")
            yield Static(f"Accuracy: {score.accuracy:.2f}%", id="result-accuracy")
            yield Static(f"Total Errors: {score.errors}", id="result-errors")
            yield Static(f"Time Used: {score.elapsed_minutes:.2f} min", id="result-time", classes="muted")
            yield Static("Original", classes="section-title")
            yield Static(
                highlight_reference(score.reference_words, alignment.reference_marks),
                id="original-box",
            )
            yield Static("Typed", classes="section-title")
            yield Static(highlight_typed(score.typed_words, alignment.typed_marks), id="typed-box")
            with Horizontal(id="result-buttons"):
                yield Button("Retry", id="retry", variant="success")
                yield Button("Home", id="home")
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "retry":
            self.action_retry()
        elif event.button.id == "home":
            self.action_home()

    def action_retry(self) -> None:
        session = TypingSession(self.session.passage, self.session.duration_minutes)
        self.app.switch_screen(ExamScreen(session))

    def action_home(self) -> None:
        self.app.pop_screen()


def history_rows(records: list[HistoryRecord]) -> list[tuple[str, ...]]:
    """Table cells for each record, newest first."""
    return [
        (
            preview(record.passage),
            f"{record.gross_wpm:.2f}",
            f"{record.net_wpm:.2f}",
            f"{record.accuracy:.2f}%",
            str(record.errors),
            humanize_timestamp(record.date),
        )
        for record in reversed(records)
    ]


class HistoryScreen(Screen):
    BINDINGS = [("escape", "back", "Back")]

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="history"):
            yield Static("History", id="history-title")
            yield Static("", id="history-body")
            yield Button("Back", id="back")
        yield Footer()

    def on_mount(self) -> None:
        records = self.app.history.load()
        totals = summarize(records)
        summary = (
            f"Total Tests: {totals['total']}\n"
            f"Average Net WPM: {totals['avg_net_wpm']:.2f}\n"
            f"Average Accuracy: {totals['avg_accuracy']:.2f}%\n"
        )

        table = Table(show_header=True, box=None, show_edge=False, pad_edge=False)
        table.add_column("Passage", ratio=1, no_wrap=True)
        table.add_column("Gross", justify="right", width=8, no_wrap=True)
        table.add_column("Net", justify="right", width=8, no_wrap=True)
        table.add_column("Accuracy", justify="right", width=10, no_wrap=True)
        table.add_column("Errors", justify="right", width=7, no_wrap=True)
        table.add_column("When", width=16, no_wrap=True)

        self.rows = history_rows(records)
        for row in self.rows:
            table.add_row(*row)

        self.query_one("#history-body", Static).update(Group(summary, table))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "back":
            self.app.pop_screen()

    def action_back(self) -> None:
        self.app.pop_screen()


class TypingTestApp(App):
    CSS = """
    #home, #exam, #result, #history {
        padding: 1 2;
    }

    #title {
        content-align: center middle;
        text-style: bold;
    }

    #subtitle, .muted {
        color: $text-muted;
    }

    #subtitle {
        content-align: center middle;
        margin-bottom: 1;
    }

    #passage-input {
        height: 8;
        border: solid $primary;
    }

    #time-row, #home-buttons, #exam-buttons, #result-buttons, #confirm-buttons {
        height: auto;
        margin-top: 1;
    }

    #time-label {
        width: auto;
        padding: 1 1 0 0;
    }

    #time-input {
        width: 12;
    }

    .section-title, #result-title, #history-title {
        text-style: bold;
        margin-top: 1;
    }

    .passage-row {
        height: auto;
    }

    .passage-use {
        width: 1fr;
    }

    #timer {
        text-style: bold;
    }

    #reference-text {
        height: 10;
        border: solid $primary;
        padding: 1;
        overflow: auto;
    }

    #typing-area {
        height: 10;
        border: solid $secondary;
    }

    #original-box, #typed-box {
        border: solid $primary;
        padding: 1;
    }

    ConfirmScreen {
        align: center middle;
    }

    #confirm {
        width: 40;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }
    """

    TITLE = "Typing Test"

    def __init__(
        self,
        passages: PassageStore | None = None,
        history: HistoryStore | None = None,
    ) -> None:
        super().__init__()
        self.passages = passages or PassageStore()
        self.history = history or HistoryStore()

    def on_mount(self) -> None:
        self.push_screen(HomeScreen())


def main() -> None:
    configure_logging()
    TypingTestApp().run()


if __name__ == "__main__":
    main()
