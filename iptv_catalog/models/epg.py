"""
EPG (Electronic Program Guide) data models.
"""
from pydantic import BaseModel


# Marker used when a guide timestamp is too short to carry a clock value
TIME_NOT_AVAILABLE = "N/A"


class Program(BaseModel):
    """TV program entry from guide data."""
    title: str
    description: str = ""
    start_time: str  # HH:MM or N/A
    end_time: str  # HH:MM or N/A
    
    # Raw guide timestamps (e.g. "20240101060000 +0000")
    start: str = ""
    stop: str = ""
    
    @property
    def has_clock_times(self) -> bool:
        """Whether both start and end carry a usable HH:MM value."""
        return TIME_NOT_AVAILABLE not in (self.start_time, self.end_time)
