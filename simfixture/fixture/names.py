import re

TIER_PATTERN = re.compile(r"^.*_tier_(\d)$")


def normalize_name(name: str) -> str:
    return name.replace(" ", "_").lower()


def extract_tier(name: str) -> int | None:
    if match := TIER_PATTERN.match(normalize_name(name)):
        return int(match.group(1))

    return None
