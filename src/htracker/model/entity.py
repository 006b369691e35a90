# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

# Document ids are UUID4 strings; the nil UUID marks a document not yet saved
EntityId: TypeAlias = str

UNSET_ENTITY_ID: EntityId = str(uuid.UUID(int=0))


class EntityType:
    TRACKER = "tracker"
    ENTRY = "entry"


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())
