from .pem_key_store import PemKeyStore, generate_key_pair

__all__ = ["PemKeyStore", "generate_key_pair"]
