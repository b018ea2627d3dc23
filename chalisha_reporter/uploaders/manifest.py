"""Uploader manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from chalisha_reporter.uploaders.base import ObjectStore

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class UploaderManifest(Generic[ConfigT]):
    """Manifest describing an uploader plugin.

    The manifest contains references to the configuration class and the
    store factory function for lazy loading of uploaders based on their key.
    """

    config_cls: type[ConfigT]
    store_factory: Callable[[ConfigT], AbstractAsyncContextManager[ObjectStore[Any]]]
