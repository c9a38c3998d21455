# SPDX-License-Identifier: MIT

from typing import Iterable

from awcontext import time
from awcontext.model.context_entry import ContextEntry
from awcontext.model.entity_id import generate_entity_id


def get_context_entry_template(context: str, tags: Iterable[str] = ()) -> ContextEntry:
    return {
        "id": generate_entity_id(),
        "timestamp": time.now_local(),
        "context": context,
        "tags": list(tags),
    }
