"""Prompt configuration loading.

Reads every 'bash.*' and 'svn-remote.*.url' entry from git config in a
single call and turns them, together with the legacy GIT_PS1_*
environment variables, into a typed PromptConfig. Unset or unparseable
values fall back to the documented defaults.

Execution Context:
    Library module - imported by the prompt pipeline

Dependencies:
    - gitps1_core.runner: git config access
    - gitps1_core.models: Configuration models

Metadata:
    Version: 0.1.0
    Author: gitps1 Team
"""
from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Mapping

from gitps1_core.models import ESC
from gitps1_core.models import DisplayConfig
from gitps1_core.models import PromptConfig
from gitps1_core.runner import GitRunner

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


CONFIG_PATTERN = r"^(bash\..*|svn-remote\..*\.url)$"

DESCRIBE_STYLE_ENV = "GIT_PS1_DESCRIBESTYLE"
SHOW_UPSTREAM_ENV = "GIT_PS1_SHOWUPSTREAM"
SVN_ID_ENV = "GIT_SVN_ID"

# git lowercases section and variable names in --get-regexp output
TOGGLE_KEYS = {
    "bash.enablegitstatus": "enable_git_status",
    "bash.enablefilestatus": "enable_file_status",
    "bash.showstatuswhenzero": "show_status_when_zero",
    "bash.showstashstate": "show_stash_state",
}

TEXT_KEYS = {
    "bash.beforetext": "before_text",
    "bash.delimtext": "delim_text",
    "bash.aftertext": "after_text",
    "bash.stashtext": "stash_text",
}

COLOR_SEGMENTS = {
    "default": "default",
    "before": "before",
    "delim": "delim",
    "after": "after",
    "branch": "branch",
    "branchahead": "branch_ahead",
    "branchbehind": "branch_behind",
    "branchbehindandahead": "branch_diverged",
    "index": "index",
    "working": "working",
    "stash": "stash",
}

TRUE_WORDS = {"true", "yes", "on"}
FALSE_WORDS = {"false", "no", "off", ""}

_ESCAPE_RE = re.compile(r"\\e|\\033|\\x1b", re.IGNORECASE)


# ---- Value Parsing ------------------------------------------------------------------------------------------


def parse_git_bool(
        value: str | None,
) -> bool | None:
    """Interpret a config value the way 'git config --bool' does.

    Args:
        value: Raw value; None means the key was given without '='.

    Returns:
        The boolean, or None if the value is not a valid boolean.
    """
    if value is None:
        return True
    lowered = value.strip().lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    try:
        return int(lowered) != 0
    except ValueError:
        return None


def decode_escapes(
        value: str,
) -> str:
    """Turn '\\e', '\\033' and '\\x1b' spellings into a real ESC character."""
    return _ESCAPE_RE.sub(ESC, value)


def parse_config_output(
        output: str,
) -> list[tuple[str, str | None]]:
    """Split 'git config -z --get-regexp' output into (key, value) pairs.

    Each entry is 'key\\nvalue' terminated by NUL; a key set without a
    value has no newline.
    """
    entries: list[tuple[str, str | None]] = []
    for record in output.split("\0"):
        if not record:
            continue
        key, sep, value = record.partition("\n")
        entries.append((key, value if sep else None))
    return entries


# ---- Loading ------------------------------------------------------------------------------------------------


def read_config_entries(
        runner: GitRunner,
) -> list[tuple[str, str | None]]:
    """Read the prompt-related git config entries.

    Returns:
        (key, value) pairs in config order; empty when nothing is set.
    """
    result = runner.run(["config", "-z", "--get-regexp", CONFIG_PATTERN])
    if not result.ok:
        # exit status 1 just means no key matched
        return []
    return parse_config_output(result.stdout)


def build_config(
        entries: list[tuple[str, str | None]],
        environ: Mapping[str, str] | None = None,
) -> PromptConfig:
    """Build a PromptConfig from config entries and the environment.

    Later entries override earlier ones, matching git's last-one-wins rule.

    Args:
        entries: (key, value) pairs as returned by read_config_entries.
        environ: Environment providing the legacy GIT_PS1_* overrides.

    Returns:
        Fully populated PromptConfig.
    """
    environ = environ if environ is not None else {}
    display_changes: dict[str, object] = {}
    colors: dict[str, dict[str, str]] = {}
    describe_style: str | None = None
    show_upstream: str | None = None
    svn_remotes: list[str] = []

    for raw_key, value in entries:
        key = raw_key.lower()

        if key in TOGGLE_KEYS:
            parsed = parse_git_bool(value)
            if parsed is None:
                logger.debug(f"Ignoring non-boolean value {value!r} for {raw_key}")
                continue
            display_changes[TOGGLE_KEYS[key]] = parsed
        elif key in TEXT_KEYS:
            display_changes[TEXT_KEYS[key]] = decode_escapes(value or "")
        elif key == "bash.describestyle":
            describe_style = value or ""
        elif key == "bash.showupstream":
            show_upstream = value or ""
        elif key.startswith("svn-remote.") and key.endswith(".url"):
            if value:
                svn_remotes.append(value)
        elif key.startswith("bash.") and key.endswith(("foregroundcolor", "backgroundcolor")):
            segment = key[len("bash."):-len("foregroundcolor")]
            if segment not in COLOR_SEGMENTS:
                logger.debug(f"Ignoring unknown color segment in {raw_key}")
                continue
            side = "fg" if key.endswith("foregroundcolor") else "bg"
            colors.setdefault(COLOR_SEGMENTS[segment], {})[side] = decode_escapes(value or "")

    defaults = DisplayConfig()
    for field_name, sides in colors.items():
        display_changes[field_name] = dataclasses.replace(getattr(defaults, field_name), **sides)

    if not describe_style:
        describe_style = environ.get(DESCRIBE_STYLE_ENV) or None
    if show_upstream is None:
        show_upstream = environ.get(SHOW_UPSTREAM_ENV)

    return PromptConfig(
        display=dataclasses.replace(defaults, **display_changes),
        describe_style=describe_style,
        show_upstream=show_upstream,
        svn_remotes=tuple(svn_remotes),
        svn_id=environ.get(SVN_ID_ENV) or None,
    )


def load_config(
        runner: GitRunner,
        environ: Mapping[str, str] | None = None,
) -> PromptConfig:
    """Load the prompt configuration for the runner's directory."""
    return build_config(read_config_entries(runner), environ)
