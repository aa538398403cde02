"""Internal constants shared across the library."""

CONTRACT_NAME = "crates.io:geigercounter"

SECONDS_IN_DAY = 86400
ONE_DAY = SECONDS_IN_DAY
TWO_DAYS = SECONDS_IN_DAY * 2

U64_MAX = 2**64 - 1

# ------------------------------------------------------------------
# Storage namespaces
# ------------------------------------------------------------------

CONFIG_KEY = b"config"
CONTRACT_INFO_KEY = b"contract_info"
RADIOACTIVITY_PREFIX = b"radioactivity/"
