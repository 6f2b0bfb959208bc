"""
Commands - CLI subcommands for monadex.

Each module is a thin front-end over ``monadex.chain``:
- deploy:  deploy / verify / config (deployment record)
- token:   MonadToken operations
- dex:     OrderBookDEX operations
- invoke:  Arbitrary read or write call from an ABI file
"""
