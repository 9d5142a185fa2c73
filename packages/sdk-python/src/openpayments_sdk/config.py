from openpayments_sdk.types import SigningConfig
from openpayments_sdk.wallet_address import is_valid_wallet_address_format


def validate_signing_config(config: SigningConfig) -> list[str]:
    errors: list[str] = []
    if not config.wallet_address_url:
        errors.append("walletAddressUrl is required")
    elif not is_valid_wallet_address_format(config.wallet_address_url):
        errors.append("walletAddressUrl must be a valid HTTPS URL")
    if not config.private_key_path:
        errors.append("privateKeyPath is required")
    if not config.key_id:
        errors.append("keyId is required")
    return errors
