"""Dynamic CLI argument builder for htmldown.

This module generates CLI arguments from the ``ConvertOptions`` dataclass
using its field metadata, and maps parsed arguments back to an options
instance.
"""

import argparse
from dataclasses import Field, fields
from typing import Any, Dict, Optional

from .options import ConvertOptions


class DynamicCLIBuilder:
    """Builds CLI arguments dynamically from the options dataclass.

    Fields marked ``exclude_from_cli`` in their metadata are skipped. Boolean
    fields defaulting to False become ``store_true`` flags; those defaulting to
    True become ``--no-*`` ``store_false`` flags.
    """

    TYPE_MAPPING = {"bool": bool, "int": int, "float": float, "str": str}

    def snake_to_kebab(self, name: str) -> str:
        """Convert snake_case to kebab-case."""
        return name.replace("_", "-")

    def infer_cli_name(self, field: Field, metadata: Dict[str, Any]) -> str:
        """Infer the CLI flag for a field.

        Parameters
        ----------
        field : Field
            Dataclass field
        metadata : dict
            Field metadata

        Returns
        -------
        str
            CLI argument name with -- prefix

        """
        if "cli_name" in metadata:
            return f"--{metadata['cli_name']}"

        kebab_name = self.snake_to_kebab(field.name)
        if self._field_type(field) is bool and field.default is True:
            kebab_name = f"no-{kebab_name}"
        return f"--{kebab_name}"

    def _field_type(self, field: Field) -> Any:
        # Annotations are strings under ``from __future__ import annotations``
        if isinstance(field.type, str):
            return self.TYPE_MAPPING.get(field.type, field.type)
        return field.type

    def get_argument_kwargs(self, field: Field, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """Build argparse kwargs from field metadata.

        Parameters
        ----------
        field : Field
            Dataclass field
        metadata : dict
            Field metadata

        Returns
        -------
        dict
            Kwargs for argparse.add_argument()

        """
        kwargs: Dict[str, Any] = {"help": metadata.get("help", f"Configure {field.name}"), "dest": field.name}

        field_type = self._field_type(field)
        if field_type is bool:
            kwargs["action"] = "store_false" if field.default is True else "store_true"
        elif "choices" in metadata:
            kwargs["choices"] = metadata["choices"]
            kwargs["default"] = field.default
        elif metadata.get("type") in (int, float):
            kwargs["type"] = metadata["type"]
            kwargs["default"] = field.default
        else:
            kwargs["default"] = field.default

        return kwargs

    def add_options_arguments(self, parser: argparse.ArgumentParser, group_name: Optional[str] = None) -> None:
        """Add one argument per CLI-visible ``ConvertOptions`` field.

        Parameters
        ----------
        parser : ArgumentParser
            Parser to add arguments to
        group_name : str, optional
            Name for argument group

        """
        group = parser.add_argument_group(group_name) if group_name else parser

        for field in fields(ConvertOptions):
            metadata = field.metadata or {}
            if metadata.get("exclude_from_cli", False):
                continue
            group.add_argument(self.infer_cli_name(field, metadata), **self.get_argument_kwargs(field, metadata))

    def map_args_to_options(self, parsed_args: argparse.Namespace, **overrides: Any) -> ConvertOptions:
        """Create ``ConvertOptions`` from parsed arguments.

        Parameters
        ----------
        parsed_args : argparse.Namespace
            Result of ``parse_args``
        **overrides : Any
            Extra field values that have no CLI flag (e.g. ``guess_lang``)

        Returns
        -------
        ConvertOptions
            The options instance

        Raises
        ------
        ValueError
            If a value fails option validation

        """
        values: Dict[str, Any] = {}
        for field in fields(ConvertOptions):
            if (field.metadata or {}).get("exclude_from_cli", False):
                continue
            if hasattr(parsed_args, field.name):
                values[field.name] = getattr(parsed_args, field.name)
        values.update(overrides)
        return ConvertOptions(**values)
