"""Cross-cutting helpers shared by API features."""
