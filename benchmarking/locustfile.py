"""Locust load testing script for StoryWeave."""

import random

from locust import HttpUser, between, task

SAMPLE_CONTENT = [
    "The robot awoke in a dust-covered lab.",
    "The abandoned Mars colony stood silent under the red sky",
    "A lighthouse keeper found a door in the cliff that was not there yesterday.",
    "The cat had been elected mayor, and nobody remembered voting.",
]

GENRES = ["scary", "funny", "sci-fi"]


class StoryWeaveUser(HttpUser):
    """Simulated writer for load testing StoryWeave."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    @task(3)
    def research_topic(self) -> None:
        """Request research for a story opening - most common operation."""
        self.client.post("/api/v1/research", json={"content": random.choice(SAMPLE_CONTENT)})

    @task(2)
    def generate_continuation(self) -> None:
        """Ask for the AI's next segment."""
        opening = random.choice(SAMPLE_CONTENT)
        self.client.post(
            "/api/v1/generate-story",
            json={
                "previousSegments": [{"content": opening, "is_ai_generated": False}],
                "genre": random.choice(GENRES),
            },
        )

    @task(1)
    def preflight(self) -> None:
        """Browser CORS preflight before a POST."""
        self.client.options(
            "/api/v1/generate-story",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )

    @task(1)
    def health(self) -> None:
        """Health probe."""
        self.client.get("/health")
