# Global config
DEFAULT_TABLE_LAYOUT = "standard"   # "standard" (3-axis REBA tables) or "flattened" (legacy addressing)

# Ekspor data evaluasi
EXPORT_CSV   = "reba_export.csv"
EXPORT_JSONL = "reba_export.jsonl"

# Logging
LOG_FILE  = "logs/reba.log"
LOG_LEVEL = "INFO"
