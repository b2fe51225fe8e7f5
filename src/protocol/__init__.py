from .codec import decode, encode, encode_pong

__all__ = ["decode", "encode", "encode_pong"]
