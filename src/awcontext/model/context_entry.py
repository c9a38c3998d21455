# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from awcontext.model.entity_id import EntityId


class ContextEntry(TypedDict):
    id: EntityId
    timestamp: pendulum.DateTime
    context: str
    tags: list[str]
