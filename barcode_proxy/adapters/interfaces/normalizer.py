from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
import logging

from barcode_proxy.domain.models.records import ProviderVariant

logger = logging.getLogger(__name__)

# Type variables for generics
T = TypeVar('T')  # Generic type for raw records
R = TypeVar('R')  # Generic type for normalized data


class DataNormalizer(Generic[T, R], ABC):
    """
    Abstract base interface for data normalizers.

    Normalizers turn a provider's raw record into the canonical representation.
    Implementations must be pure and total: absent fields become defaults and
    no input raises.

    Type Parameters:
        T: The type of raw record from a provider
        R: The type of normalized data after processing
    """

    @abstractmethod
    def normalize_primary(self, record: T) -> R:
        """
        Normalizes a record produced by the primary provider.

        Args:
            record: Raw primary record

        Returns:
            R: Normalized data
        """
        pass

    @abstractmethod
    def normalize_secondary(self, record: T) -> R:
        """
        Normalizes a record produced by the secondary provider.

        Args:
            record: Raw secondary record

        Returns:
            R: Normalized data
        """
        pass

    @abstractmethod
    def normalize_unrecognized(self, record: T) -> R:
        """
        Produces the value used for a record no mapping applies to.

        Args:
            record: Raw record of unexpected type

        Returns:
            R: Normalized fallback data
        """
        pass

    def normalize(self, record: T, variant: Optional[ProviderVariant] = None) -> R:
        """
        Routes a record to the mapping for its provider variant.

        Args:
            record: Raw record from a provider
            variant: Which provider produced it; read from the record when omitted

        Returns:
            R: Normalized data
        """
        if variant is None:
            variant = getattr(record, "variant", None)
        if variant == ProviderVariant.PRIMARY:
            return self.normalize_primary(record)
        elif variant == ProviderVariant.SECONDARY:
            return self.normalize_secondary(record)
        logger.warning(f"No normalizer for provider variant: {variant}")
        return self.normalize_unrecognized(record)
