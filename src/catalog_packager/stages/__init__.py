"""Pipeline stages.

Pipeline order: ingest -> scan -> collect -> package -> export

Stages:
    ingest  -- Read products.csv (UTF-8 only), drop rows without a sku,
               merge pipe-delimited artists with " and ". Raises on a missing,
               non-UTF-8 or empty catalog and on a missing sku column.
    scan    -- List SKU directories under files/, skipping junk entries and
               plain files. Builds the read-only collection: per directory,
               audio and image files with parsed track number, track SKU,
               resolved artists and canonical/slug names. Empty directories
               are skipped with a warning.
    package -- Create files-data-{timestamp}/ with EP/ and wav/. Per SKU,
               copy every file to wav/{sku}/ (slug names for audio) and then
               write EP/{sku}.zip (canonical names for audio).
    export  -- Write products-{timestamp}.csv with the fixed 19-column schema
               and recomputed download_file_paths/download_file_names.
               Unmatched tracks keep blank download fields and are logged.
"""
