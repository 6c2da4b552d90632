"""FastAPI layer over :pymod:`franchise_ops`."""
