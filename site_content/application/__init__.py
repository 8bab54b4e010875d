"""Application layer: cache, resolution and dispatch services over the content API."""
