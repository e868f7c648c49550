# lambdas/common/templates.py
from pathlib import Path
from typing import List

PROMPTS_DIR = Path(__file__).parent / "prompts"

INSTRUCTIONS_STRUCTURE_TAG = "<Instructions Structure>"


def load_template(name: str) -> str:
    """Reads a prompt template shipped in the prompts/ directory."""
    prompt_path = PROMPTS_DIR / name
    return prompt_path.read_text(encoding="utf-8")


def render_template(template: str, placeholder: str, value: str) -> str:
    """
    Replaces the first occurrence of the placeholder with the value.

    The value is inserted verbatim and later occurrences are left alone.
    """
    return template.replace(placeholder, value, 1)


def build_assistant_partial(variables: List[str]) -> str:
    """
    Builds the assistant turn the model continues from when writing a meta-prompt.

    Declared variables are listed in an <Inputs> block as {UPPERCASE} names
    so the generated instructions reference them.
    """
    variable_string = "\n".join(f"{{{variable.upper()}}}" for variable in variables)

    assistant_partial = ""
    if variable_string:
        assistant_partial += "<Inputs>" + variable_string + "\n</Inputs>\n"
    assistant_partial += INSTRUCTIONS_STRUCTURE_TAG
    return assistant_partial
