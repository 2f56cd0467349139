# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GlobalConfig(BaseSettings):
    """Process-wide numeric defaults, overridable through ``CMOTION_*`` env vars."""

    projection_tolerance: float = Field(default=1e-4, gt=0.0)
    projection_max_iterations: int = Field(default=50, gt=0)
    delta: float = Field(default=0.05, gt=0.0)
    lambda_: float = Field(default=2.0, ge=1.0)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CMOTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )
