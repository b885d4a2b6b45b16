"""
Candidate resolution for ISRC lookups.

Deezer can hold several tracks for the same ISRC (the same master on a
single, an album and a compilation, for instance), but its ISRC endpoint
returns only one of them and its search cannot filter by ISRC. The resolver
searches for the track's artist and title, keeps the results that match the
primary track on duration and title, refetches them to compare the real
ISRC, and lets a selector break the tie when more than one survives.
"""

from typing import List, Sequence

from ..clients.deezer import DeezerClient
from ..core.config import PROMPTS
from ..core.exceptions import DecodeError, InputError, IsrcTagError, NetworkError, NotFoundError
from ..core.logger import get_logger
from ..models.deezer import RawSearchCandidate, RawTrack
from ..ui.selector import Selector

logger = get_logger(__name__)

# Failures that only disqualify a single candidate during the cross-check
CANDIDATE_FAILURES = (NetworkError, DecodeError, NotFoundError)


def candidate_label(track: RawTrack) -> str:
    """Human-readable label for a verified candidate."""
    return f"{track.id}, in album: {track.album.title}"


def matches_primary(candidate: RawSearchCandidate, primary: RawTrack) -> bool:
    """Whether a search result has exactly the primary track's duration and title."""
    return candidate.duration == primary.duration and candidate.title == primary.title


class CandidateResolver:
    """Resolves an ISRC to a single Deezer track.

    Stateless between calls: the client and the selector are the only
    collaborators, and both are injected.
    """

    def __init__(self, client: DeezerClient, selector: Selector):
        self.client = client
        self.selector = selector

    def resolve(self, isrc: str) -> RawTrack:
        """
        Resolve ``isrc`` to one track.

        Args:
            isrc: Recording code to resolve

        Returns:
            The chosen full track

        Raises:
            NotFoundError, NetworkError, DecodeError: The primary lookup or the
                search failed
            InputError: The selector could not make a valid choice
        """
        try:
            primary = self.client.fetch_track_by_isrc(isrc)
        except IsrcTagError as e:
            raise e.with_stage("lookup")
        logger.debug(f"Primary track for {isrc}: {primary.id} '{primary.title}' by {primary.artist.name}")

        try:
            candidates = self.client.search_tracks(primary.artist.name, primary.title)
        except IsrcTagError as e:
            raise e.with_stage("search")
        logger.debug(f"Search returned {len(candidates)} candidate(s) for '{primary.title}'")

        survivors = self.verify_candidates(isrc, primary, candidates)
        logger.info(f"{len(survivors)} track(s) verified for ISRC {isrc}")

        if not survivors:
            # Search and ISRC lookup disagree now and then; the primary track is still right
            return primary
        if len(survivors) == 1:
            return survivors[0]
        return self.select(survivors)

    def verify_candidates(
        self,
        isrc: str,
        primary: RawTrack,
        candidates: Sequence[RawSearchCandidate]
    ) -> List[RawTrack]:
        """
        Cross-check search candidates against the primary track.

        Candidates are filtered on duration and title, refetched one at a time,
        and kept only when the refetched ISRC equals ``isrc``. A candidate whose
        refetch fails is dropped; the others are still checked.

        Args:
            isrc: Queried recording code
            primary: Track returned by the ISRC lookup
            candidates: Search results, in ranking order

        Returns:
            Verified full tracks, in search order
        """
        verified = []
        for candidate in candidates:
            if not matches_primary(candidate, primary):
                continue

            try:
                track = self.client.fetch_track_by_id(candidate.id)
            except CANDIDATE_FAILURES as e:
                logger.debug(f"Dropping candidate {candidate.id}: {e}")
                continue

            if track.isrc != isrc:
                logger.debug(f"Dropping candidate {candidate.id}: ISRC {track.isrc} != {isrc}")
                continue

            verified.append(track)

        return verified

    def select(self, survivors: Sequence[RawTrack]) -> RawTrack:
        """Let the selector pick one of several verified tracks."""
        labels = [candidate_label(track) for track in survivors]
        try:
            index = self.selector.choose(PROMPTS["DEEZER_DUPLICATES"], labels)
        except IsrcTagError as e:
            raise e.with_stage("selection")

        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(survivors):
            raise InputError(f"Selection {index!r} is out of range 0-{len(survivors) - 1}", stage="selection")

        logger.debug(f"Selected candidate {survivors[index].id}")
        return survivors[index]
