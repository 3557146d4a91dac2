"""logscribe: analyze local log files with a locally hosted language model."""

from .collector import CombinedLogs, LogFileMetadata, combine_log_files, list_log_files, read_log_file
from .config import AppPaths, Configuration, load_configuration, save_configuration
from .llm import LLMError, analyze, test_connection
from .prompts import PromptTemplate, TemplateSelection, build_final_prompt, list_templates
from .report import build_report, save_report
from .workflow import StartupError, Workflow

__all__ = [
    "AppPaths",
    "CombinedLogs",
    "Configuration",
    "LLMError",
    "LogFileMetadata",
    "PromptTemplate",
    "StartupError",
    "TemplateSelection",
    "Workflow",
    "analyze",
    "build_final_prompt",
    "build_report",
    "combine_log_files",
    "list_log_files",
    "list_templates",
    "load_configuration",
    "read_log_file",
    "save_configuration",
    "save_report",
    "test_connection",
]
