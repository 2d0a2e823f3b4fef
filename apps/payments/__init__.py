"""Payment lifecycle: creation, proof, tenant decision and expiration."""
