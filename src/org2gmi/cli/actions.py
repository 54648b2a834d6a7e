"""Custom argparse Action classes for the org2gmi CLI.

Every action looks for an ``ORG2GMI_<DEST>`` environment variable and uses
it as the default; arguments given on the command line always win.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

ENV_PREFIX = "ORG2GMI_"
TRUTHY_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable consulted for ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_options(option_strings, strip_no: bool = False):
    for option in option_strings:
        if strip_no and option.startswith("--no-"):
            return option[5:].replace("-", "_")
        if option.startswith("--"):
            return option[2:].replace("-", "_")
        if option.startswith("-"):
            return option[1:]
    return None


class EnvironmentAwareAction(argparse.Action):
    """Store action that supports environment variable defaults."""

    def __init__(self, *args, **kwargs):
        dest = kwargs.get("dest") or _dest_from_options(args)
        if dest:
            env_key = env_key_for(dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                try:
                    value_type = kwargs.get("type")
                    kwargs["default"] = value_type(env_value) if value_type is not None else env_value
                except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
                    logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")

        super().__init__(*args, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Store the value."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag that supports environment variable defaults."""

    def __init__(self, *args, **kwargs):
        dest = kwargs.get("dest") or _dest_from_options(args)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = env_value.lower() in TRUTHY_VALUES

        super().__init__(*args, **kwargs)


class EnvironmentAwareAppendAction(argparse._AppendAction):
    """Append action whose environment default is a comma-separated list."""

    def __init__(self, *args, **kwargs):
        dest = kwargs.get("dest") or _dest_from_options(args)
        if dest:
            env_value = os.environ.get(env_key_for(dest))
            if env_value is not None:
                kwargs["default"] = [item.strip() for item in env_value.split(",") if item.strip()]

        super().__init__(*args, **kwargs)
