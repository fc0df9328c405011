"""Council portal edit coordination service."""
