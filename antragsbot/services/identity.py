"""
Identity Resolution

Registration guard for invoking users and proposer lookup by display name.
"""

from typing import List, Optional
import logging

from antragsbot.errors import IdentityNotFoundError
from antragsbot.integrations.records import RecordServiceClient
from antragsbot.models.motion import Person
from antragsbot.services.correlation_store import CorrelationStore

logger = logging.getLogger(__name__)


async def resolve_invoker(store: CorrelationStore, user_id: str) -> Person:
    """
    Resolve the Discord user invoking a command.

    Raises:
        IdentityNotFoundError: If the user never registered
    """
    person = await store.get_person_by_user_id(user_id)
    if person is None:
        logger.info(f"Rejected unregistered user {user_id}")
        raise IdentityNotFoundError()
    return person


class ProposerResolver:
    """
    Maps a proposer display name to person ids.

    The Correlation Store is asked first; the full Record Service roster is
    only scanned when no registered user carries that name. The two sources
    can diverge (a roster rename is not reflected locally), in which case the
    stored name wins.
    """

    def __init__(self, store: CorrelationStore, records: RecordServiceClient):
        self.store = store
        self.records = records

    async def resolve(self, name: Optional[str]) -> List[str]:
        if not name:
            return []

        person = await self.store.get_person_by_name(name)
        if person is not None:
            return [person.id]

        roster = await self.records.list_persons()
        matches = [p.id for p in roster if p.name == name]
        if not matches:
            logger.warning(f"No person named '{name}' in roster, proposer set left empty")
        elif len(matches) > 1:
            logger.warning(f"{len(matches)} persons named '{name}' in roster")
        return matches

    async def find_in_roster(self, name: str) -> Optional[Person]:
        """Roster entry for a registration request, exact name match."""
        roster = await self.records.list_persons()
        for person in roster:
            if person.name == name:
                return person
        return None
