"""Prompt template discovery and interactive selection."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from .config import DEFAULT_SYSTEM_PROMPT
from .console import ConsolePort, render_menu, read_choice

logger = logging.getLogger(__name__)

TEMPLATE_GLOB = "*.txt"
README_NAME = "README.txt"
ADDITIONAL_INSTRUCTIONS_SEPARATOR = "--- Additional Instructions ---"

_WORD_SPLIT = re.compile(r"[-_]+")

# ╭──────────────────────────────────────────────────────────────╮
# │ Starter content written into a fresh prompts folder.         │
# ╰──────────────────────────────────────────────────────────────╯
README_TEXT = """\
Prompt templates
================

Every *.txt file in this folder (except this README) is offered as an
analysis focus when you run "Analyze & Report". The file name becomes the
menu label: "database-issues.txt" is shown as "Database Issues".

The template text replaces the default system prompt sent to the model.
You can still add one-off instructions after choosing a template.
"""

STARTER_TEMPLATES = {
    "general-analysis.txt": (
        "You are an IT service desk analyst. Summarise the overall health shown "
        "in these logs, list every error and warning with its probable cause, "
        "and finish with a prioritised list of recommended actions."
    ),
    "security-review.txt": (
        "You are a security analyst. Review these logs for failed logins, "
        "privilege changes, unexpected network access and other suspicious "
        "activity. Rate each finding as low, medium or high risk and suggest "
        "containment steps."
    ),
    "database-issues.txt": (
        "You are a database administrator. Focus on connection failures, "
        "timeouts, deadlocks, slow queries and replication problems in these "
        "logs. Explain the likely root cause of each issue and how to fix it."
    ),
}


@dataclass
class PromptTemplate:
    display_name: str
    file_name: str
    file_path: Path


@dataclass
class TemplateSelection:
    """Outcome of the interactive template menu."""

    source: Literal["default", "template"]
    template_content: str
    custom_text: str = ""

    @property
    def final_prompt(self) -> str:
        return build_final_prompt(self.template_content, self.custom_text)


def default_system_prompt() -> str:
    return DEFAULT_SYSTEM_PROMPT


def templates_folder_exists(prompts_dir: Path | str) -> bool:
    return Path(prompts_dir).is_dir()


def to_display_name(stem: str) -> str:
    """Turn ``database-issues`` or ``database_issues`` into ``Database Issues``."""

    words = [word for word in _WORD_SPLIT.split(stem) if word]
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def list_templates(prompts_dir: Path | str) -> list[PromptTemplate]:
    folder = Path(prompts_dir)
    if not folder.is_dir():
        logger.warning("Prompts folder not found: %s", folder)
        return []

    templates = []
    for path in sorted(folder.glob(TEMPLATE_GLOB)):
        if not path.is_file() or path.name == README_NAME:
            continue
        templates.append(
            PromptTemplate(
                display_name=to_display_name(path.stem),
                file_name=path.name,
                file_path=path,
            )
        )
    return templates


def read_template(template_path: Path | str) -> Optional[str]:
    path = Path(template_path)
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read prompt template %s: %s", path, exc)
        return None


def build_final_prompt(template: str, custom_text: str) -> str:
    if not custom_text or not custom_text.strip():
        return template
    return f"{template}\n\n{ADDITIONAL_INSTRUCTIONS_SEPARATOR}\n{custom_text}"


def select_template_interactive(
    console: ConsolePort,
    prompts_dir: Path | str,
    default_prompt: Optional[str] = None,
) -> TemplateSelection:
    """Let the user pick a template, falling back to *default_prompt* on any problem."""

    configured = bool(default_prompt and default_prompt.strip())
    fallback = default_prompt if configured else default_system_prompt()
    templates = list_templates(prompts_dir)

    options = [template.display_name for template in templates]
    if configured:
        options.append("Default (configured system prompt)")
    else:
        options.append("Default (built-in analysis prompt)")
    render_menu(console, "Select an analysis template", options)

    choice = read_choice(console, f"Choose a template [1-{len(options)}]:", len(options))
    selection = TemplateSelection(source="default", template_content=fallback)

    if choice is None:
        console.warning("Invalid selection; using the default prompt.")
    elif choice <= len(templates):
        chosen = templates[choice - 1]
        content = read_template(chosen.file_path)
        if content:
            console.info(f"Using template: {chosen.display_name}")
            selection = TemplateSelection(source="template", template_content=content)
        else:
            console.warning(f"Could not load '{chosen.file_name}'; using the default prompt.")
    else:
        console.info("Using the default prompt.")

    extra = console.ask("Additional instructions (press Enter to skip):").strip()
    if extra:
        selection.custom_text = extra
    return selection


def seed_prompts_folder(prompts_dir: Path | str) -> list[Path]:
    """Write the README and starter templates that are not present yet."""

    folder = Path(prompts_dir)
    folder.mkdir(parents=True, exist_ok=True)

    created: list[Path] = []
    files = {README_NAME: README_TEXT, **STARTER_TEMPLATES}
    for name, text in files.items():
        target = folder / name
        if target.exists():
            continue
        try:
            target.write_text(text.rstrip("\n") + "\n", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create %s: %s", target, exc)
            continue
        created.append(target)
    return created
