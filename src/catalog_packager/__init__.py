"""Catalog Packager -- turn a label's products.csv and files/ tree into downloads.

Core modules:
    config     -- Pipeline configuration via pydantic-settings (.env + env vars)
                  and loguru setup.
    cli        -- Click CLI entry point. Runs in a working directory holding
                  files/ and products.csv; exits 1 on any pipeline error.
    runner     -- Phase orchestration (ingest -> scan -> collect -> package ->
                  export). Stops at the first failing phase.
    models     -- Record types (ProductRecord, MediaFile, OutputRow), the
                  read-only Collection, extension sets and the export schema.
    naming     -- Canonical and slug filename derivation, ASCII folding.
    validation -- SKU naming checks, duplicate detection, track/release split.
    report     -- Failure tables and run summaries for the console.
    errors     -- Exception hierarchy.

Subpackages:
    stages -- ingest, scan, package and export phases.
"""
