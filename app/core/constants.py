"""Core constants: user-facing messages and cache directives for served files."""

# File serving endpoint messages
FILE_NOT_FOUND_MESSAGE = "Archivo no encontrado"
FILE_CONTENT_UNAVAILABLE_MESSAGE = "Contenido no disponible"
FILE_PATH_UNAVAILABLE_MESSAGE = "Ruta del archivo no disponible"
FILE_RETRIEVAL_FAILED_MESSAGE = "No fue posible recuperar el archivo solicitado"

# Cache-Control for inline database bytes vs. streamed object storage bytes
DATABASE_FILE_CACHE_CONTROL = "public, max-age=60"
OBJECT_FILE_CACHE_CONTROL = "private, max-age=60"

# Lifetime of the signed URL used when direct streaming fails
FALLBACK_SIGNED_URL_SECONDS = 60

# Base used to turn filesystem paths into redirect targets
FILE_URL_BASE = "file:///"
