import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from app.lib.logger import configure_logger

logger = configure_logger(__name__)

load_dotenv()


@dataclass
class StacksConfig:
    """Ledger access used by the proposal report reader."""

    network: str = os.getenv("NETWORK", "mainnet")
    # Empty means the public Hiro node for `network`
    api_url: str = os.getenv("STACKS_NETWORK_URL", "")
    api_key: str = os.getenv("HIRO_API_KEY", "")
    vote_manager_address: str = os.getenv("VOTE_MANAGER_ADDRESS", "")
    vote_manager_contract_name: str = os.getenv(
        "VOTE_MANAGER_CONTRACT_NAME", "vote-manager"
    )
    proposal_data_function: str = os.getenv(
        "VOTE_MANAGER_PROPOSAL_FUNCTION", "get-proposal-data"
    )
    sender_address: str = os.getenv("DEPLOYER_ADDRESS", "")

    def __post_init__(self) -> None:
        if self.network not in ("mainnet", "testnet"):
            raise ValueError(
                f"Invalid network: {self.network}. Must be 'mainnet' or 'testnet'"
            )
        if not self.api_url:
            if self.network == "testnet":
                self.api_url = "https://api.testnet.hiro.so"
            else:
                self.api_url = "https://api.hiro.so"

    @property
    def contract_address(self) -> str:
        """Deployer address of the vote manager, without any `.contract-name` suffix."""
        return self.vote_manager_address.split(".")[0]


@dataclass
class GoogleSheetsConfig:
    service_account_email: str = os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", "")
    private_key: str = os.getenv("GOOGLE_PRIVATE_KEY", "").replace("\\n", "\n")
    spreadsheet_id: str = os.getenv("VOTING_SHEET_ID", "")
    topics_range: str = os.getenv("VOTING_SHEET_RANGE", "Topics!A:D")
    reports_range: str = os.getenv("REPORTS_SHEET_RANGE", "Reports!A:G")
    api_url: str = os.getenv(
        "GOOGLE_SHEETS_API_URL", "https://sheets.googleapis.com/v4"
    )
    value_input_option: str = os.getenv("GOOGLE_SHEETS_VALUE_INPUT", "USER_ENTERED")


@dataclass
class ReportingConfig:
    ledger_timeout_seconds: float = float(
        os.getenv("REPORTING_LEDGER_TIMEOUT_SECONDS", "10")
    )
    sink_timeout_seconds: float = float(
        os.getenv("REPORTING_SINK_TIMEOUT_SECONDS", "10")
    )
    # Off by default: redelivered events produce another row
    deduplicate: bool = os.getenv("REPORTING_DEDUPLICATE", "false").lower() == "true"
    topics_cache_seconds: int = int(os.getenv("VOTING_TOPICS_CACHE_SECONDS", "60"))


@dataclass
class WebhookConfig:
    auth_token: str = os.getenv("CHAINHOOK_WEBHOOK_SECRET", "")


@dataclass
class ServerConfig:
    host: str = os.getenv("CHAINHOOK_SERVER_HOST", "0.0.0.0")
    port: int = int(os.getenv("CHAINHOOK_SERVER_PORT", "3000"))


@dataclass
class Config:
    stacks: StacksConfig = field(default_factory=StacksConfig)
    sheets: GoogleSheetsConfig = field(default_factory=GoogleSheetsConfig)
    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    webhook: WebhookConfig = field(default_factory=WebhookConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def load(cls) -> "Config":
        """Load and validate configuration"""
        config = cls()
        if not config.stacks.vote_manager_address:
            logger.warning("VOTE_MANAGER_ADDRESS is not set; ledger reads will fail")
        if not config.sheets.spreadsheet_id:
            logger.warning("VOTING_SHEET_ID is not set; sheet access will fail")
        logger.info(
            "Configuration loaded successfully",
            extra={"network": config.stacks.network},
        )
        return config


# Global configuration instance
config = Config.load()
