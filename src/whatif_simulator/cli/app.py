"""What If Simulator CLI Application.

A Textual-based terminal interface for exploring "What if...?" scenarios.

Screens:
- Simulator: scenario input with side-by-side serious and fun results
- Feedback modal: rate the last simulation
- Stats: aggregated feedback
- Config: toggle simulator options at runtime
"""

from __future__ import annotations

import asyncio
import logging
import os

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical, VerticalScroll
from textual.logging import TextualHandler
from textual.screen import Screen
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    Markdown,
    Rule,
    Static,
    Switch,
    TextArea,
)

from whatif_simulator.api import WhatIfAPI, create_default_api
from whatif_simulator.config import configure_logging
from whatif_simulator.llm import check_claude_credentials
from whatif_simulator.models import ProcessingMetrics, ProcessScenarioResponse

# =============================================================================
# Theme and Styles
# =============================================================================

CSS = """
Screen {
    background: $surface;
}

.panel {
    border: solid $primary;
    padding: 1;
    margin: 0 0 1 0;
}

.panel-title {
    text-style: bold;
    color: $secondary;
    margin-bottom: 1;
}

.menu-title {
    text-align: center;
    text-style: bold;
    color: $success;
    margin-bottom: 1;
}

#input-row {
    height: auto;
    margin: 1 1 0 1;
}

#scenario-input {
    width: 1fr;
}

#simulate {
    margin-left: 1;
}

#status-line {
    margin: 0 1;
    color: $text-muted;
}

#results {
    height: 1fr;
    margin: 0 1;
}

.result-panel {
    width: 1fr;
}

#serious-panel {
    border: solid $primary;
}

#fun-panel {
    border: solid $warning;
}

#metrics-line {
    dock: bottom;
    height: 1;
    margin: 0 1;
    color: $text-muted;
}

#feedback-modal, #config-modal {
    align: center middle;
}

.modal-container {
    width: 70;
    height: auto;
    border: thick $primary;
    background: $surface;
    padding: 1 2;
}

.modal-title {
    text-align: center;
    text-style: bold;
    margin-bottom: 1;
}

.input-label {
    margin-top: 1;
}

.switch-row {
    height: auto;
}

.switch-label {
    width: 1fr;
    padding: 1 0;
}

.button-row {
    height: auto;
    margin-top: 1;
    align: center middle;
}

.button-row Button {
    margin: 0 1;
}

#comments-input {
    height: 5;
}
"""

RATING_FIELDS = [
    ("serious-rating", "seriousRating", "Serious version (1-5):"),
    ("fun-rating", "funRating", "Fun version (1-5):"),
    ("overall-rating", "overallSatisfaction", "Overall satisfaction (1-5):"),
]


def format_metrics(metrics: ProcessingMetrics | None) -> str:
    """One-line summary of stage timings."""
    if metrics is None:
        return "Metrics disabled"
    return (
        f"Total {metrics.total_processing_time:.0f}ms | "
        f"validate {metrics.validation_time:.0f}ms | "
        f"process {metrics.processing_time:.0f}ms | "
        f"serious {metrics.serious_generation_time:.0f}ms | "
        f"fun {metrics.fun_generation_time:.0f}ms | "
        f"format {metrics.formatting_time:.0f}ms"
    )


# =============================================================================
# Screens
# =============================================================================


class SimulatorScreen(Screen):
    """Main screen: enter a scenario, read both takes side by side."""

    BINDINGS = [
        Binding("f", "feedback", "Feedback"),
        Binding("s", "stats", "Stats"),
        Binding("c", "config", "Config"),
    ]

    def __init__(self, api: WhatIfAPI) -> None:
        super().__init__()
        self.api = api
        self.last_response: ProcessScenarioResponse | None = None
        self.last_scenario: str = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="input-row"):
            yield Input(placeholder="What if...?", id="scenario-input")
            yield Button("Simulate", id="simulate", variant="success")
        yield Static("Enter a scenario and press Simulate.", id="status-line")
        with Horizontal(id="results"):
            with VerticalScroll(id="serious-panel", classes="result-panel"):
                yield Static("🎯 Serious Analysis", classes="panel-title")
                yield Markdown("", id="serious-output")
            with VerticalScroll(id="fun-panel", classes="result-panel"):
                yield Static("🎭 Fun Interpretation", classes="panel-title")
                yield Markdown("", id="fun-output")
        yield Static("", id="metrics-line")
        yield Footer()

    @on(Button.Pressed, "#simulate")
    @on(Input.Submitted, "#scenario-input")
    def start_simulation(self) -> None:
        scenario = self.query_one("#scenario-input", Input).value
        self.query_one("#simulate", Button).disabled = True
        self.query_one("#status-line", Static).update("Simulating...")
        self.last_scenario = scenario
        self.run_simulation(scenario)

    @work(thread=True)
    def run_simulation(self, scenario: str) -> None:
        """Run the pipeline in a worker thread."""
        session_id = self.last_response.session_id if self.last_response else None
        response = asyncio.run(self.api.process_scenario(scenario, session_id))
        self.app.call_from_thread(self.show_response, response)

    def show_response(self, response: ProcessScenarioResponse) -> None:
        self.query_one("#simulate", Button).disabled = False
        self.query_one("#metrics-line", Static).update(format_metrics(response.metrics))

        if not response.success or response.result is None:
            self.query_one("#status-line", Static).update(f"⚠️ {response.error}")
            self.notify(response.error or "Simulation failed", severity="warning")
            return

        self.last_response = response
        result = response.result
        complexity = result.metadata.complexity or "unknown"
        self.query_one("#status-line", Static).update(
            f"Scenario type: {result.metadata.scenario_type} | Complexity: {complexity} | "
            f"Generated in {result.metadata.processing_time}ms"
        )
        self.query_one("#serious-output", Markdown).update(result.serious_version)
        self.query_one("#fun-output", Markdown).update(result.fun_version)
        # Move focus off the input so f/s/c reach the screen bindings
        self.query_one("#serious-panel", VerticalScroll).focus()

    def action_feedback(self) -> None:
        if self.last_response is None:
            self.notify("Run a simulation before leaving feedback", severity="warning")
            return
        self.app.push_screen(
            FeedbackModal(self.api, self.last_response.session_id, self.last_scenario)
        )

    def action_stats(self) -> None:
        self.app.push_screen(StatsScreen(self.api))

    def action_config(self) -> None:
        self.app.push_screen(ConfigScreen(self.api))


class FeedbackModal(Screen):
    """Modal screen for rating the last simulation."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, api: WhatIfAPI, session_id: str, scenario: str) -> None:
        super().__init__()
        self.api = api
        self.session_id = session_id
        self.scenario = scenario

    def compose(self) -> ComposeResult:
        with Container(id="feedback-modal"):
            with Vertical(classes="modal-container"):
                yield Static("RATE THIS SIMULATION", classes="modal-title")
                yield Rule()
                for input_id, _, label in RATING_FIELDS:
                    yield Static(label, classes="input-label")
                    yield Input(value="3", id=input_id, type="integer")
                yield Static("Comments (optional):", classes="input-label")
                yield TextArea(id="comments-input")
                with Horizontal(classes="button-row"):
                    yield Button("Submit", id="submit", variant="success")
                    yield Button("Cancel", id="cancel", variant="default")

    @on(Button.Pressed, "#submit")
    def submit_feedback(self) -> None:
        data: dict[str, object] = {"sessionId": self.session_id, "scenario": self.scenario}
        for input_id, key, _ in RATING_FIELDS:
            try:
                data[key] = int(self.query_one(f"#{input_id}", Input).value)
            except ValueError:
                self.notify("Ratings must be whole numbers from 1 to 5", severity="error")
                return

        comments = self.query_one("#comments-input", TextArea).text.strip()
        if comments:
            data["comments"] = comments

        response = self.api.submit_feedback(data)
        if not response.success:
            self.notify(response.message, severity="error")
            return

        self.notify(response.message)
        self.app.pop_screen()

    @on(Button.Pressed, "#cancel")
    def cancel(self) -> None:
        self.app.pop_screen()

    def action_cancel(self) -> None:
        self.app.pop_screen()


class StatsScreen(Screen):
    """Screen showing aggregated feedback."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def __init__(self, api: WhatIfAPI) -> None:
        super().__init__()
        self.api = api

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll():
            yield Static("FEEDBACK STATISTICS", classes="menu-title")
            yield Rule()
            yield Markdown(self._stats_markdown(), id="stats-content")
        yield Footer()

    def _stats_markdown(self) -> str:
        stats = self.api.get_feedback_stats()
        if stats.total_feedbacks == 0:
            return "*No feedback yet.*"
        return "\n".join(
            [
                f"- **Feedback entries:** {stats.total_feedbacks}",
                f"- **Sessions:** {stats.session_count}",
                f"- **Average serious rating:** {stats.average_serious_rating:.2f}",
                f"- **Average fun rating:** {stats.average_fun_rating:.2f}",
                f"- **Average satisfaction:** {stats.average_overall_satisfaction:.2f}",
            ]
        )

    def action_go_back(self) -> None:
        self.app.pop_screen()


class ConfigScreen(Screen):
    """Modal screen for changing simulator options."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    SWITCHES = [
        ("enable-logging", "enable_logging", "Stage logging"),
        ("enable-metrics", "enable_metrics", "Collect metrics"),
        ("enable-parallel", "enable_parallel_generation", "Parallel generation"),
    ]

    def __init__(self, api: WhatIfAPI) -> None:
        super().__init__()
        self.api = api

    def compose(self) -> ComposeResult:
        config = self.api.get_config()
        with Container(id="config-modal"):
            with Vertical(classes="modal-container"):
                yield Static("SIMULATOR SETTINGS", classes="modal-title")
                yield Rule()
                for switch_id, field, label in self.SWITCHES:
                    with Horizontal(classes="switch-row"):
                        yield Static(label, classes="switch-label")
                        yield Switch(value=getattr(config, field), id=switch_id)
                yield Static("Processing time budget (ms):", classes="input-label")
                yield Input(
                    value=str(config.max_processing_time), id="max-processing-time", type="integer"
                )
                with Horizontal(classes="button-row"):
                    yield Button("Save", id="save", variant="success")
                    yield Button("Cancel", id="cancel", variant="default")

    @on(Button.Pressed, "#save")
    def save(self) -> None:
        overrides: dict[str, object] = {
            field: self.query_one(f"#{switch_id}", Switch).value
            for switch_id, field, _ in self.SWITCHES
        }
        try:
            overrides["max_processing_time"] = int(
                self.query_one("#max-processing-time", Input).value
            )
            self.api.update_config(overrides)
        except ValueError as e:
            self.notify(f"Invalid settings: {e}", severity="error")
            return

        self.notify("Settings saved")
        self.app.pop_screen()

    @on(Button.Pressed, "#cancel")
    def cancel(self) -> None:
        self.app.pop_screen()

    def action_cancel(self) -> None:
        self.app.pop_screen()


# =============================================================================
# Main Application
# =============================================================================


class WhatIfApp(App):
    """Main What If Simulator CLI application."""

    TITLE = "What If Simulator"
    SUB_TITLE = "Serious and fun takes on any scenario"
    CSS = CSS

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(self, api: WhatIfAPI | None = None) -> None:
        super().__init__()
        self.api = api or create_default_api()

    def on_mount(self) -> None:
        """Show the simulator screen when app starts."""
        self.push_screen(SimulatorScreen(self.api))


def main() -> None:
    """Entry point for the CLI application.

    For debugging with Textual devtools:
        1. In one terminal: textual console
        2. In another terminal: textual run --dev src/whatif_simulator/cli/app.py
    Or set TEXTUAL=1 environment variable for basic logging.
    """
    # Log lines would draw over the TUI, so route them to the Textual console
    configure_logging(handlers=[TextualHandler()])
    if not check_claude_credentials():
        logging.getLogger(__name__).warning("Running without Claude credentials")

    app = WhatIfApp()
    # Enable devtools if TEXTUAL environment variable is set
    if os.environ.get("TEXTUAL"):
        app.run(inline=False)
    else:
        app.run()


if __name__ == "__main__":
    main()
