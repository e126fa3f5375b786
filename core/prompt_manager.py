"""Tool descriptions and guides stored as Jinja2 templates in a YAML file."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import jinja2
import yaml

DEFAULT_PROMPT_FILE = Path(__file__).resolve().parent / "prompts" / "prompts.yaml"


class PromptManager:
    def __init__(
        self,
        file_path: Union[str, Path] = DEFAULT_PROMPT_FILE,
        section_path: Optional[str] = None,
    ) -> None:
        """Load prompt templates from a YAML file.

        Args:
            file_path: Path to the YAML file containing prompts
            section_path: Dotted key of the section to use as the root

        Raises:
            FileNotFoundError: If the prompt file doesn't exist
            ValueError: If the file is malformed or the section is missing
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Prompt file not found: {file_path}")

        try:
            data = yaml.safe_load(file_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML file {file_path}: {e}") from e

        self._prompt_data = self._lookup(data, section_path) if section_path else data
        self._environment = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=False,
            autoescape=False,
        )
        self._templates: Dict[str, jinja2.Template] = {}

    @staticmethod
    def _lookup(data: Any, dotted_key: str) -> Any:
        current = data
        for key in dotted_key.split("."):
            if not isinstance(current, dict) or key not in current:
                raise ValueError(f"Prompt '{dotted_key}' not found")
            current = current[key]
        return current

    def get_prompt(self, prompt_name: str) -> str:
        """Return the raw template text stored under ``prompt_name``."""
        value = self._lookup(self._prompt_data, prompt_name)
        if not isinstance(value, str):
            raise ValueError(f"Prompt '{prompt_name}' is not a string")
        return value

    def render_prompt(self, prompt_name: str, **prompt_args: Any) -> str:
        """Render the template stored under ``prompt_name``.

        Args:
            prompt_name: Dotted key of the prompt
            **prompt_args: Variables available to the template

        Returns:
            Rendered text with surrounding whitespace removed

        Raises:
            ValueError: If the prompt is missing or not a string
            jinja2.UndefinedError: If the template uses a variable not given
        """
        if prompt_name not in self._templates:
            self._templates[prompt_name] = self._environment.from_string(self.get_prompt(prompt_name))
        return self._templates[prompt_name].render(**prompt_args).strip()
