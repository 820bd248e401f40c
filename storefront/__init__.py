"""Clothing storefront and event ticketing service."""
