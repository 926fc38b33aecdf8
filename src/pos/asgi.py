from __future__ import annotations

from pos.infrastructure.bootstrap import default_container
from pos.infrastructure.web.fastapi_app import create_app

container = default_container()
app = create_app(
    container.uow_factory,
    strict_status_transitions=container.settings.strict_status_transitions,
)
