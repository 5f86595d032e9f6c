from __future__ import annotations

import os
import logging
import typing as tp

import dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = 'STOPWATCH_'

class Settings(BaseModel):
    watch_interval_ms: int = Field(default=100, gt=0)
    log_level: str = 'WARNING'

    model_config = ConfigDict(
        frozen=True,
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f'Unknown log level: {v}')
        return v

    @property
    def watchInterval(self) -> float:
        return self.watch_interval_ms / 1000

    @classmethod
    def fromEnv(
        cls, environ: tp.Mapping[str, str] | None = None,
    ) -> Settings:
        '''
        Reads `STOPWATCH_*` variables. With `environ=None`, the nearest `.env`
        file is loaded into `os.environ` first.
        '''
        if environ is None:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
            environ = os.environ
        raw = {}
        for name in cls.model_fields:
            value = environ.get(ENV_PREFIX + name.upper())
            if value is not None:
                raw[name] = value
        return cls.model_validate(raw)
