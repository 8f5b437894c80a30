"""Ranking pipeline: resolution, distance, relevance and ordering."""
