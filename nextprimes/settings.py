import os

U64_MAX = 0xFFFFFFFFFFFFFFFF

# Defaults used when the commands are run without a start value
DEFAULT_START_U64 = U64_MAX
DEFAULT_START_BIG = 18446744073713598463

DEFAULT_COUNT     = int(os.getenv("NEXTPRIMES_COUNT", "100"))
DEFAULT_MR_ROUNDS = int(os.getenv("NEXTPRIMES_MR_ROUNDS", "32"))  # error <= 4^-rounds
