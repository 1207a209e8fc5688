"""Link configuration used for size and airtime analysis.

The codec itself takes no options; these settings only describe the link a
schema is being sized for.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LinkConfig:
    """Characteristics of the constrained link messages travel over.

    Attributes:
        data_rate: Data rate in bits per second (default 2400).
            Typical values:
            - Iridium SBD: ~2400 bps
            - LoRa SF12/125 kHz: ~250 bps
            - Narrowband HF/VHF: 300 - 1200 bps

        max_frame_size: Largest payload the link accepts in one frame, in
            bytes (default 340, the Iridium SBD mobile-originated limit).

    Examples:
        ```python
        from satpack.config import LinkConfig

        config = LinkConfig(data_rate=250, max_frame_size=51)
        config.transmission_time(24)  # seconds
        ```
    """

    data_rate: int = 2400  # bits per second
    max_frame_size: int = 340  # bytes

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.data_rate <= 0:
            raise ValueError(f"data_rate must be > 0, got {self.data_rate}")

        if self.max_frame_size <= 0:
            raise ValueError(f"max_frame_size must be > 0, got {self.max_frame_size}")

    def transmission_time(self, num_bytes: int) -> float:
        """Seconds needed to send ``num_bytes`` at the configured data rate."""
        return (num_bytes * 8) / float(self.data_rate)

    def fits(self, num_bytes: int) -> bool:
        """Whether a payload of ``num_bytes`` fits in a single frame."""
        return num_bytes <= self.max_frame_size
