"""
Default parameters.
"""

# Bit length of the RSA modulus used when none is given.
DEFAULT_BIT_LENGTH = 1024

# Size of the challenge space of the equality proof, in bits.
CHALLENGE_LENGTH = 80

# Statistical hiding parameter for randomizers drawn from intervals.
STATISTICAL_SECURITY = 80

# Groups smaller than this are only good for testing.
MIN_SECURE_BIT_LENGTH = 1024
