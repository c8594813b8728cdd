# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Command pipeline orchestration."""

from helpdesk.pipeline.factory import create_pipeline
from helpdesk.pipeline.orchestrator import CommandPipeline
from helpdesk.pipeline.response import PipelineResponse, error_response, shape_response

__all__ = [
    "CommandPipeline",
    "PipelineResponse",
    "create_pipeline",
    "error_response",
    "shape_response",
]
