import os
from dataclasses import dataclass

@dataclass(frozen=True)
class Settings:
    token: str
    # "all_class_bonus" or "full_share"
    distribution: str = "all_class_bonus"
    bonus_percent: int = 10
    # Seconds between notice deliveries
    relay_interval: float = 5.0

def load_settings() -> Settings:
    token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    return Settings(
        token=token or "",
        distribution=os.getenv("PARTY_XP_DISTRIBUTION", "all_class_bonus").strip(),
        bonus_percent=int(os.getenv("PARTY_XP_BONUS_PERCENT", "10")),
        relay_interval=float(os.getenv("PARTY_RELAY_INTERVAL", "5.0")),
    )
