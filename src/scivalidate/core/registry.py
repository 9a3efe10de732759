"""Validator types addressable by name.

Suite configuration files refer to validators by a short ``type`` string.
This module maps those strings to :class:`~scivalidate.core.base.BaseValidator`
subclasses and builds instances from the plain ``settings`` and ``labels``
mappings found in YAML::

    entries:
      - title: Zone temperature
        type: series              # looked up here
        settings: {allowed_root_mean_squared_error: 1.0}

The built-in ``series`` and ``scatter`` validators register themselves when
:mod:`scivalidate.validators` is imported. A project adds its own type with
the :meth:`ValidatorRegistry.register` decorator; the class must accept
``(expected, found, settings=..., labels=...)``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Type

if TYPE_CHECKING:
    from pydantic import BaseModel

    from scivalidate.core.base import BaseValidator

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """Name to validator class mapping used by suite configuration files.

    Type names are case-insensitive. Registering a second class under a name
    already taken is an error unless ``replace=True`` is given.
    """

    _validators: dict[str, Type["BaseValidator"]] = {}

    @classmethod
    def register(cls, name: str | None = None, *, replace: bool = False):
        """Class decorator adding a validator type.

        Parameters
        ----------
        name : str, optional
            Type name used in configuration files. Defaults to the class's
            ``validator_type``.
        replace : bool, optional
            Allow taking over a name registered by another class.

        Raises
        ------
        ValueError
            If the name is taken and ``replace`` is False, or if no name is
            given and the class does not set ``validator_type``.
        """

        def decorator(validator_class: Type["BaseValidator"]):
            key = (name or validator_class.validator_type).lower()
            if key == "base":
                raise ValueError(
                    f"{validator_class.__name__} needs a name or its own validator_type"
                )
            current = cls._validators.get(key)
            if current is not None and current is not validator_class and not replace:
                raise ValueError(
                    f"Validator type '{key}' is already registered by {current.__name__}"
                )
            cls._validators[key] = validator_class
            logger.debug(f"Validator type '{key}' -> {validator_class.__name__}")
            return validator_class

        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a validator type; unknown names are ignored."""
        cls._validators.pop(name.lower(), None)

    @classmethod
    def get(cls, name: str) -> Type["BaseValidator"]:
        """Return the class registered under ``name``.

        Raises
        ------
        ValueError
            If no validator is registered under that name.
        """
        try:
            return cls._validators[name.lower()]
        except KeyError:
            available = ", ".join(cls.list_available())
            raise ValueError(
                f"Unknown validator type: '{name}'. Available: {available}"
            ) from None

    @classmethod
    def list_available(cls) -> list[str]:
        return sorted(cls._validators)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name.lower() in cls._validators

    @classmethod
    def create(
        cls,
        name: str,
        expected,
        found,
        settings: "dict[str, Any] | BaseModel | None" = None,
        labels: dict[str, Any] | None = None,
    ) -> "BaseValidator":
        """Build a validator from the mappings of a configuration entry.

        Parameters
        ----------
        name : str
            Validator type.
        expected, found : array_like
            Samples to compare.
        settings : dict or settings model, optional
            Thresholds; a dict is validated against the class's
            ``settings_class``.
        labels : dict, optional
            Fields of :class:`~scivalidate.validators.ChartLabels`.

        Raises
        ------
        ValueError
            If the type is unknown.
        pydantic.ValidationError
            If ``settings`` or ``labels`` are invalid.
        """
        from scivalidate.validators._utils import ChartLabels

        validator_class = cls.get(name)
        settings_class = validator_class.settings_class
        if settings_class is not None and not isinstance(settings, settings_class):
            settings = settings_class(**(settings or {}))
        return validator_class(
            expected,
            found,
            settings=settings,
            labels=ChartLabels(**(labels or {})),
        )
