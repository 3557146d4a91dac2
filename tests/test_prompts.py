import pytest

from logscribe.prompts import (
    ADDITIONAL_INSTRUCTIONS_SEPARATOR,
    README_NAME,
    build_final_prompt,
    default_system_prompt,
    list_templates,
    read_template,
    seed_prompts_folder,
    select_template_interactive,
    templates_folder_exists,
    to_display_name,
)


@pytest.fixture()
def prompts_dir(tmp_path):
    folder = tmp_path / "prompts"
    folder.mkdir()
    (folder / "database-issues.txt").write_text("  Focus on the database.  \n", encoding="utf-8")
    (folder / "network_TIMEOUTS.txt").write_text("Focus on the network.", encoding="utf-8")
    (folder / README_NAME).write_text("Not a template", encoding="utf-8")
    (folder / "readme.txt").write_text("Lowercase readme is a template", encoding="utf-8")
    return folder


def test_list_templates_builds_display_names(prompts_dir):
    templates = list_templates(prompts_dir)

    names = {template.file_name: template.display_name for template in templates}
    assert names == {
        "database-issues.txt": "Database Issues",
        "network_TIMEOUTS.txt": "Network Timeouts",
        "readme.txt": "Readme",
    }
    assert all(template.file_path.parent == prompts_dir for template in templates)


def test_list_templates_missing_folder(tmp_path):
    assert templates_folder_exists(tmp_path / "prompts") is False
    assert list_templates(tmp_path / "prompts") == []


@pytest.mark.parametrize(
    "stem, expected",
    [
        ("database-issues", "Database Issues"),
        ("security_review", "Security Review"),
        ("mixed-case_NAME", "Mixed Case Name"),
        ("double--dash", "Double Dash"),
    ],
)
def test_to_display_name(stem, expected):
    assert to_display_name(stem) == expected


def test_read_template_strips_whitespace(prompts_dir):
    assert read_template(prompts_dir / "database-issues.txt") == "Focus on the database."
    assert read_template(prompts_dir / "missing.txt") is None


def test_build_final_prompt():
    assert build_final_prompt("A", "") == "A"
    assert build_final_prompt("A", "   ") == "A"
    assert build_final_prompt("A", "B") == f"A\n\n{ADDITIONAL_INSTRUCTIONS_SEPARATOR}\nB"
    assert build_final_prompt("A", "B") == "A\n\n--- Additional Instructions ---\nB"


def test_select_template_uses_chosen_template(prompts_dir, scripted_console):
    console = scripted_console(["1", "Only the last hour."])

    selection = select_template_interactive(console, prompts_dir)

    assert selection.source == "template"
    assert selection.template_content == "Focus on the database."
    assert selection.custom_text == "Only the last hour."
    assert selection.final_prompt.endswith("--- Additional Instructions ---\nOnly the last hour.")
    assert "  4. Default (built-in analysis prompt)" in console.text


def test_select_template_default_option(prompts_dir, scripted_console):
    console = scripted_console(["4", ""])

    selection = select_template_interactive(console, prompts_dir, default_prompt="Configured prompt")

    assert selection.source == "default"
    assert selection.final_prompt == "Configured prompt"
    assert "  4. Default (configured system prompt)" in console.text
    assert console.messages("warning") == []


@pytest.mark.parametrize("answer", ["0", "9", "abc", ""])
def test_select_template_invalid_input_falls_back(prompts_dir, scripted_console, answer):
    console = scripted_console([answer, ""])

    selection = select_template_interactive(console, prompts_dir)

    assert selection.source == "default"
    assert selection.template_content == default_system_prompt()
    assert console.messages("warning")


def test_select_template_unreadable_template_falls_back(prompts_dir, scripted_console):
    (prompts_dir / "database-issues.txt").write_bytes(b"\xff\xfe")
    console = scripted_console(["1", ""])

    selection = select_template_interactive(console, prompts_dir, default_prompt="Configured prompt")

    assert selection.source == "default"
    assert selection.template_content == "Configured prompt"
    assert any("database-issues.txt" in message for message in console.messages("warning"))


def test_select_template_blank_default_prompt_uses_builtin(tmp_path, scripted_console):
    console = scripted_console(["1", ""])

    selection = select_template_interactive(console, tmp_path / "none", default_prompt="  ")

    assert selection.template_content == default_system_prompt()


def test_seed_prompts_folder_creates_missing_files_only(tmp_path):
    folder = tmp_path / "prompts"
    folder.mkdir()
    (folder / "security-review.txt").write_text("Mine", encoding="utf-8")

    created = seed_prompts_folder(folder)

    assert (folder / README_NAME).exists()
    assert folder / "security-review.txt" not in created
    assert (folder / "security-review.txt").read_text(encoding="utf-8") == "Mine"
    assert "Database Issues" in [template.display_name for template in list_templates(folder)]
    assert seed_prompts_folder(folder) == []
