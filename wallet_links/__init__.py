"""Wallet address tracking for linked CoinStats accounts."""
