"""Exchange-rate, pricing and barcode-scan service for a retail point of sale."""
