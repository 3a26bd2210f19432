"""Configuration constants for airdrop-deployments library."""

DEFAULT_RPC_URL = "http://localhost:8545"

# Relative to the working directory the operator runs the tool from
CONFIG_DIRNAME = "script"
CONFIG_FILENAME = ".deploy-config.json"
DEFAULT_ARTIFACTS_DIRNAME = "out"

# Where each resolvable configuration key may come from.
# env: environment variables, checked in order
# prompt: text shown to the operator when nothing else yields a value
# default: used when the operator leaves the prompt blank
CONFIG_SOURCES = {
    "privateKey": {
        "env": ["PRIVATE_KEY"],
        "prompt": "Enter your private key: ",
    },
    "ethereumRpcUrl": {
        "env": ["RPC_URL", "ETH_RPC_URL"],
        "prompt": "Enter Ethereum RPC URL: ",
        "default": DEFAULT_RPC_URL,
    },
    "ethereumEtherscanApiKey": {
        "env": ["ETHERSCAN_API_KEY"],
        "prompt": "Enter Ethereum Etherscan API KEY: (https://etherscan.io/myaccount) ",
    },
    "worldIDRouterAddress": {
        "env": ["WORLD_ID_ROUTER_ADDRESS"],
        "prompt": "Enter the WorldIDRouter address: ",
    },
    "groupId": {
        "env": ["GROUP_ID"],
        "prompt": "Enter WorldIDRouter group id: ",
    },
    "actionId": {
        "env": ["ACTION_ID"],
        "prompt": "Enter ActionId: ",
    },
    "erc20Address": {
        "env": ["ERC20_ADDRESS"],
        "prompt": "Enter ERC20 address: ",
    },
    "holderAddress": {
        "env": ["HOLDER_ADDRESS"],
        "prompt": "Enter holder address: ",
    },
    "airdropAmount": {
        "env": ["AIRDROP_AMOUNT"],
        "prompt": "Enter amount to airdrop: ",
    },
    "airdropAddress": {
        "env": ["AIRDROP_ADDRESS"],
        "prompt": "Enter the airdrop contract address: ",
    },
}

# Step results are stored in the configuration record under "<step><suffix>"
ADDRESS_KEY_SUFFIX = "Address"
TX_HASH_KEY_SUFFIX = "TxHash"

# solc >= 0.5 library placeholder: "__$" + 34 hex digits of keccak256(fqn) + "$__"
PLACEHOLDER_REGEX = r"__\$[0-9a-fA-F]{34}\$__"
PLACEHOLDER_HASH_LENGTH = 34
ADDRESS_HEX_LENGTH = 40
PRIVATE_KEY_HEX_LENGTH = 64

# Transaction submission
GAS_BUFFER_NUMERATOR = 12
GAS_BUFFER_DENOMINATOR = 10
DEFAULT_RECEIPT_TIMEOUT = 600
DEFAULT_POLL_INTERVAL = 2.0
RPC_REQUEST_TIMEOUT = 30

ERC20_APPROVE_SIGNATURE = "approve(address,uint256)"
