# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: helpdesk core
"""Development server entry point."""

from __future__ import annotations

import uvicorn

from helpdesk.config.settings import ApiSettings


def main() -> None:
    settings = ApiSettings()
    uvicorn.run(
        "helpdesk.api.app:create_default_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
