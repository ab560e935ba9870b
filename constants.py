# Processed contributors files. ICF addresses are in bech32, fundraiser addresses are in hex
BECH32_CONTRIBUTORS_FILES = ['accounts/icf/contributors.json']
HEX_CONTRIBUTORS_FILES = ['accounts/private/contributors.json', 'accounts/public/contributors.json']

# AiB allocations are kept separate because they vest
AIB_EMPLOYEES_FILE = 'accounts/aib/employees.json'
AIB_MULTISIG_FILE = 'accounts/aib/multisig.json'

GENESIS_TEMPLATE_FILE = 'params/genesis_template.json'
GENESIS_OUTPUT_FILE = 'penultimate_genesis.json'

# Instant of the genesis block, in RFC 3339 format
GENESIS_TIME = '2019-03-13T23:00:00Z'
# Total number of atoms to assign in genesis (two decimals at most)
ATOM_GENESIS_TOTAL = '236198958.12'
# Total number of accounts in genesis
ADDRESS_GENESIS_TOTAL = 984

# Denomination of the coins in genesis
ATOM_DENOMINATION = 'uatom'
# Amounts are specified in centi-atoms at most
CENTI_PRECISION = 100
# How many uatoms in a centi-atom
UATOMS_PER_CENTI = 10_000

# Prefix to use for Bech-32 addresses
BECH32_PREFIX = 'cosmos'
# Prefix to use for Bech-32 public keys
BECH32_PUBKEY_PREFIX = 'cosmospub'
# How many bytes in an address
ADDRESS_LENGTH = 20

# Amino prefixes for the registered public key types
AMINO_PREFIX_SECP256K1 = bytes.fromhex('eb5ae987')
AMINO_PREFIX_MULTISIG = bytes.fromhex('22c1f7e2')

# Vesting schedules, in months after genesis
VESTING_EMPLOYEES = {
    "cliff": 12,  # 1 year
}
VESTING_MULTISIG = {
    "start": 2,  # 2 months
    "end": 24,  # 2 years
}
