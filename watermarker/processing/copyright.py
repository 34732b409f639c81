"""Copyright rewriting for the owner's own photos."""

import logging
from datetime import date
from typing import Callable

from watermarker.metadata import MetadataStore, Tag
from watermarker.processing.models import OwnerIdentity

logger = logging.getLogger(__name__)

# Tags that identify the equipment or computer rather than the photographer
IDENTIFYING_TAGS = (
    Tag.HOST_COMPUTER,
    Tag.SERIAL_NUMBER,
    Tag.LENS_SERIAL_NUMBER,
)


class CopyrightRewriter:
    """Normalizes the ownership metadata of photos taken by the owner.

    A photo belongs to the owner when its Copyright tag mentions both the
    owner's first and last name. For those photos the copyright notice is
    replaced with a standard one for the current year, owner, artist and
    software are set, and serial numbers and host computer are removed.

    The rewrite must run before any banner text is formatted, so the
    banner shows the rewritten copyright.
    """

    def __init__(
        self,
        identity: OwnerIdentity,
        today: Callable[[], date] = date.today
    ) -> None:
        """Initialize the rewriter.

        Args:
            identity: Owner whose photos are rewritten
            today: Provider of the current date
        """
        self.identity = identity
        self._today = today

    def matches(self, store: MetadataStore) -> bool:
        """Return True if the copyright names the owner."""
        # An owner without both names configured never matches
        if not self.identity.first_name or not self.identity.last_name:
            return False

        copyright_text = store.get_value(Tag.COPYRIGHT)
        if copyright_text is None:
            return False
        return (
            self.identity.first_name in copyright_text
            and self.identity.last_name in copyright_text
        )

    def copyright_notice(self) -> str:
        """Return the copyright notice written on rewrite."""
        return (
            f"Copyright © {self.identity.full_name} "
            f"{self._today().year}, All rights reserved"
        )

    def apply(self, store: MetadataStore) -> bool:
        """Rewrite the ownership tags in place if the photo is the owner's.

        Args:
            store: Metadata of the image

        Returns:
            True if the store was rewritten
        """
        if not self.matches(store):
            return False

        store.set_value(Tag.COPYRIGHT, self.copyright_notice())
        store.set_value(Tag.OWNER_NAME, self.identity.full_name)
        store.set_value(Tag.ARTIST, self.identity.full_name)
        store.set_value(Tag.SOFTWARE, self.identity.software)

        for tag in IDENTIFYING_TAGS:
            store.remove(tag)

        logger.debug("Copyright metadata rewritten for owner")
        return True
