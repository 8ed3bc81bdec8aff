"""Discord bot for claiming vanity links backed by Cloudflare Workers KV."""

__all__ = ["__version__"]

__version__ = "0.1.0"
