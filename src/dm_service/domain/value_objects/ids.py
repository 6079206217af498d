from __future__ import annotations

from typing import NewType

MessageId = NewType("MessageId", int)

# Synthetic id carried by the last message of a stub conversation.
STUB_MESSAGE_ID = MessageId(0)
