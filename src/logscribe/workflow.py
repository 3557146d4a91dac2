"""Interactive menu loop and the test-connection / analyze-and-report pipelines."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from . import llm
from .collector import collect_logs, list_log_files, logs_folder_exists
from .config import AppPaths, Configuration, initialize_default_configuration, load_configuration
from .console import ConsolePort, render_menu, read_choice
from .prompts import seed_prompts_folder, select_template_interactive
from .report import build_report, save_report

logger = logging.getLogger(__name__)

MENU_TITLE = "Log Analyzer - Main Menu"
MENU_OPTIONS = ("Test Connection", "Analyze & Report", "Exit")
CHOICE_TEST, CHOICE_ANALYZE, CHOICE_EXIT = 1, 2, 3

TROUBLESHOOTING_TIPS = (
    "Make sure the local LLM server is running (e.g. `ollama serve` or LM Studio's server tab).",
    "Check apiEndpoint and apiPort in config.json (Ollama uses 11434, LM Studio uses 1234).",
    "Check that apiPath points at the chat completions route (usually /v1/chat/completions).",
    "Confirm the configured model is installed and loaded.",
)


class StartupError(RuntimeError):
    """Raised when the tool cannot prepare its working directory."""


class Workflow:
    """Drive the interactive session for one base directory."""

    def __init__(self, paths: AppPaths, console: ConsolePort) -> None:
        self.paths = paths
        self.console = console

    # ╭──────────────────────────────────────────────────────────╮
    # │ Startup                                                   │
    # ╰──────────────────────────────────────────────────────────╯
    def startup(self) -> None:
        base = self.paths.base_dir
        if not base.is_dir():
            raise StartupError(f"Working directory not found: {base}")

        try:
            for folder in (self.paths.logs_dir, self.paths.reports_dir):
                if not folder.is_dir():
                    folder.mkdir(parents=True)
                    self.console.info(f"Created folder: {folder}")
            if not self.paths.prompts_dir.is_dir():
                seed_prompts_folder(self.paths.prompts_dir)
                self.console.info(f"Created folder with starter templates: {self.paths.prompts_dir}")
        except OSError as exc:
            raise StartupError(f"Could not prepare folders in {base}: {exc}") from exc

        if not self.paths.config_file.exists():
            if not initialize_default_configuration(self.paths.config_file):
                raise StartupError(f"Could not create {self.paths.config_file}")
            self.console.info(f"Created default configuration: {self.paths.config_file}")

    # ╭──────────────────────────────────────────────────────────╮
    # │ Menu loop                                                 │
    # ╰──────────────────────────────────────────────────────────╯
    def run(self) -> int:
        self.startup()

        while True:
            render_menu(self.console, MENU_TITLE, MENU_OPTIONS)
            try:
                choice = read_choice(self.console, f"Select an option [1-{len(MENU_OPTIONS)}]:", len(MENU_OPTIONS))
                if choice is None:
                    self.console.warning("Invalid choice. Please enter 1, 2 or 3.")
                    continue
                if choice == CHOICE_EXIT:
                    break
                self._dispatch(choice)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break

        self.console.print("Goodbye!")
        return 0

    def _dispatch(self, choice: int) -> None:
        handlers = {CHOICE_TEST: self.run_test_connection, CHOICE_ANALYZE: self.run_analyze}
        handler = handlers[choice]
        try:
            handler()
        except (EOFError, KeyboardInterrupt):
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected failure in %s", handler.__name__)
            self.console.error(f"Unexpected error: {exc}")

    # ╭──────────────────────────────────────────────────────────╮
    # │ Handlers                                                  │
    # ╰──────────────────────────────────────────────────────────╯
    def _load_usable_configuration(self) -> Optional[Configuration]:
        config = load_configuration(self.paths.config_file)
        if config is None:
            self.console.error(f"Could not load configuration from {self.paths.config_file}.")
            self.console.warning("Fix or delete config.json; a default one is created on next start.")
            return None

        problems = config.connection_problems()
        if problems:
            self.console.error("Configuration is incomplete or invalid:")
            for problem in problems:
                self.console.print(f"  - {problem}")
            return None
        return config

    def _probe(self, config: Configuration) -> bool:
        return llm.test_connection(
            config.api_endpoint,
            config.api_port,
            config.api_path,
            config.model,
            timeout_seconds=llm.CONNECTION_TEST_TIMEOUT,
        )

    def _print_troubleshooting(self) -> None:
        self.console.print("Troubleshooting tips:")
        for tip in TROUBLESHOOTING_TIPS:
            self.console.print(f"  - {tip}")

    def run_test_connection(self) -> bool:
        config = self._load_usable_configuration()
        if config is None:
            return False

        url = llm.build_api_url(config.api_endpoint, config.api_port, config.api_path)
        self.console.info(f"Testing connection to {url} (model: {config.model})...")
        if self._probe(config):
            self.console.success("Connection successful. The LLM API responded.")
            return True

        self.console.error(f"Connection failed: no valid response from {url}.")
        self._print_troubleshooting()
        return False

    def run_analyze(self) -> Optional[Path]:
        """Run the analyze-and-report pipeline; returns the saved report path."""

        logs_dir = self.paths.logs_dir
        if not logs_folder_exists(logs_dir):
            self.console.error(f"Logs folder not found: {logs_dir}")
            self.console.warning("Create the folder and copy your *.log files into it.")
            return None

        if not list_log_files(logs_dir):
            self.console.error(f"No .log files found in {logs_dir}")
            self.console.warning("Copy the log files you want analyzed into the logs folder.")
            return None

        combined = collect_logs(logs_dir)
        if combined is None or not combined.text.strip():
            self.console.error("The log files could not be read or are empty.")
            self.console.warning("Check that the files are UTF-8 text and not locked by another program.")
            return None
        self.console.info(
            f"Collected {len(combined.files)} log file(s), {combined.total_size_kb:.2f} KB in total."
        )

        config = self._load_usable_configuration()
        if config is None:
            return None

        selection = select_template_interactive(
            self.console,
            self.paths.prompts_dir,
            default_prompt=config.system_prompt,
        )
        system_prompt = selection.final_prompt

        self.console.info("Checking that the LLM API is reachable...")
        if not self._probe(config):
            self.console.error("The LLM API is not reachable; analysis cancelled.")
            self._print_troubleshooting()
            return None

        self.console.info(f"Analyzing logs with {config.model}. This can take a while...")
        analysis = llm.analyze(
            combined.text,
            config.api_endpoint,
            config.api_port,
            config.api_path,
            system_prompt,
            config.model,
            config.temperature,
            config.max_tokens,
            config.timeout_seconds,
        )
        if not analysis or not analysis.strip():
            self.console.error("The model returned no analysis.")
            self.console.warning("Try again, increase timeoutSeconds, or reduce the amount of log data.")
            return None

        summary = (
            f"Analyzed {len(combined.files)} log file(s) totaling {combined.total_size_kb:.2f} KB."
        )
        content = build_report(analysis, combined.file_names, summary)
        saved = save_report(content, self.paths.reports_dir)
        if saved is None:
            self.console.error(f"Could not save the report in {self.paths.reports_dir}.")
            self.console.warning("Check disk space and write permissions for the reports folder.")
            return None

        self.console.success("Analysis complete.")
        self.console.print(f"  Files analyzed: {len(combined.files)}")
        self.console.print(f"  Total size:     {combined.total_size_kb:.2f} KB")
        self.console.print(f"  Report saved:   {saved}")
        return saved
