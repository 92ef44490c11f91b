from abc import abstractmethod
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from app.domain.models.address import NormalizedAddress


class AddressPayload(BaseModel):
    """
    Abstract base for provider specific address payloads.

    Each provider decodes its JSON body into a subclass of this model. The
    subclass knows how to map its own field names onto the common
    NormalizedAddress shape, so the lookup service never formats provider
    data itself.

    Class Attributes:
        SOURCE: Provider tag stamped on every normalized address
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    SOURCE: ClassVar[str] = ""

    @abstractmethod
    def normalize(self) -> NormalizedAddress:
        """
        Converts the decoded payload into a NormalizedAddress.

        Returns:
            NormalizedAddress: The address tagged with SOURCE
        """
        pass
