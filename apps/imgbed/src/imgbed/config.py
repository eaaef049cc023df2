"""Repository configuration shared by all commands."""

import logging
import os
from collections.abc import Mapping

from ghcontents import get_token
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"

ENV_OWNER = "GITHUB_OWNER"
ENV_REPO = "GITHUB_REPO"
ENV_TOKEN = "GITHUB_TOKEN"
ENV_BRANCH = "GITHUB_BRANCH"


class ClientConfig(BaseModel):
    """Target repository and credentials, read once per process."""

    model_config = ConfigDict(frozen=True)

    owner: str = ""
    repo: str = ""
    token: str = Field(default="", repr=False)
    branch: str = DEFAULT_BRANCH

    @field_validator("owner", "repo", "token", mode="before")
    @classmethod
    def _strip(cls, value: str | None) -> str:
        return (value or "").strip()

    @field_validator("branch", mode="before")
    @classmethod
    def _default_branch(cls, value: str | None) -> str:
        return (value or "").strip() or DEFAULT_BRANCH

    @model_validator(mode="after")
    def _check_required(self) -> "ClientConfig":
        missing = [
            env
            for env, value in ((ENV_OWNER, self.owner), (ENV_REPO, self.repo), (ENV_TOKEN, self.token))
            if not value
        ]
        if missing:
            raise ConfigError(f"Please set environment variables: {', '.join(missing)}")
        return self

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        use_gh_cli: bool = False,
    ) -> "ClientConfig":
        """
        Build config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            use_gh_cli: Fall back to `gh auth token` when no token is set

        Raises:
            ConfigError: owner, repo or token is missing
        """
        env = os.environ if environ is None else environ
        token = get_token(use_gh_cli=use_gh_cli, environ=dict(env))
        config = cls(
            owner=env.get(ENV_OWNER),
            repo=env.get(ENV_REPO),
            token=token,
            branch=env.get(ENV_BRANCH) or DEFAULT_BRANCH,
        )
        logger.debug("Config loaded: %s/%s branch=%s", config.owner, config.repo, config.branch)
        return config
