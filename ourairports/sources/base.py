from abc import ABC, abstractmethod
from typing import Any, List


class ShardSource(ABC):
    """
    Base interface for all shard sources.

    A source only knows how to produce the raw rows of a shard; validation
    and cleaning of those rows is done by the ShardLoader, so every source
    yields tables with the same guarantees.
    """

    @abstractmethod
    def load_shard(self, shard: str) -> List[Any]:
        """
        Load the raw rows of one shard.

        Args:
            shard: Shard name, one of 'basic_info', 'codes', 'coordinates',
                'region' or 'references'

        Returns:
            The decoded JSON array of the shard

        Raises:
            ShardLoadError: if the shard cannot be read or decoded
        """
        pass

    def get_source_name(self) -> str:
        """
        Get the name of this source.

        Returns:
            String identifier for this source
        """
        return self.__class__.__name__.lower()
