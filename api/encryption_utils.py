"""
Encryption utilities for sensitive environment variables and API keys.
Uses Fernet symmetric encryption for securing sensitive data.
"""

import os
import base64
from cryptography.fernet import Fernet
import logging

# Environment variable name for the encryption key
ENCRYPTION_KEY_ENV = 'ECOTRACK_ENCRYPTION_KEY'

def get_encryption_key() -> bytes:
    """
    Read the Fernet key from the environment.
    Returns None when no key is configured, in which case secrets are read as plain text.
    """
    key_str = os.environ.get(ENCRYPTION_KEY_ENV)
    if not key_str:
        return None

    # Fernet accepts the url-safe base64 key as-is; validate it up front.
    try:
        key = key_str.encode()
        if len(base64.urlsafe_b64decode(key)) != 32:
            raise ValueError("Fernet key must decode to 32 bytes")
        return key
    except (ValueError, TypeError):
        logging.error("Invalid encryption key format. Must be a url-safe base64 Fernet key.")
        raise ValueError("Invalid encryption key format")

def encrypt_value(value: str, key: bytes = None) -> str:
    """
    Encrypt a string value using Fernet encryption.

    Args:
        value: The string value to encrypt
        key: Fernet key; defaults to the key from ECOTRACK_ENCRYPTION_KEY

    Returns:
        Fernet token as a string
    """
    if not value:
        return ""

    key = key or get_encryption_key()
    if key is None:
        raise ValueError(f"{ENCRYPTION_KEY_ENV} is not set")
    return Fernet(key).encrypt(value.encode()).decode()

def decrypt_value(encrypted_value: str, key: bytes = None) -> str:
    """
    Decrypt a Fernet token produced by encrypt_value.

    Args:
        encrypted_value: Fernet token
        key: Fernet key; defaults to the key from ECOTRACK_ENCRYPTION_KEY

    Returns:
        Decrypted string value
    """
    if not encrypted_value:
        return ""

    try:
        key = key or get_encryption_key()
        if key is None:
            raise ValueError(f"{ENCRYPTION_KEY_ENV} is not set")
        return Fernet(key).decrypt(encrypted_value.encode()).decode()
    except Exception as e:
        logging.error(f"Failed to decrypt value: {e}")
        raise ValueError("Failed to decrypt value")

def get_encrypted_env_var(env_var_name: str, default: str = None) -> str:
    """
    Get and decrypt an environment variable that may contain encrypted data.

    Args:
        env_var_name: Name of the environment variable
        default: Default value if environment variable is not set

    Returns:
        Decrypted value, the raw value if it is not encrypted, or default if not set
    """
    encrypted_value = os.environ.get(env_var_name)
    if encrypted_value is None:
        return default

    if not os.environ.get(ENCRYPTION_KEY_ENV):
        return encrypted_value

    try:
        return decrypt_value(encrypted_value)
    except ValueError:
        logging.warning(f"Failed to decrypt {env_var_name}, returning raw value")
        return encrypted_value  # Fallback to raw value

def get_gemini_api_key() -> str:
    """
    Get the Gemini API key, decrypting it when it was stored encrypted.

    Returns:
        API key or None if not set
    """
    return get_encrypted_env_var('GEMINI_API_KEY')

if __name__ == "__main__":
    # Example: How to encrypt a value for environment setup
    new_key = Fernet.generate_key()
    print(f"{ENCRYPTION_KEY_ENV}={new_key.decode()}")
    print(f"GEMINI_API_KEY={encrypt_value('your-secret-api-key-here', new_key)}")
