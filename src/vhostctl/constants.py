"""Shared constants for vhostctl."""

from pathlib import Path

# Site layout (overridable via VhostctlConfig / env vars)
WWW_BASE = Path("/var/www")
DOCUMENT_ROOT_NAME = "wwwroot"
LOG_DIR_NAME = "logs"
ACME_CHALLENGE_PATH = ".well-known/acme-challenge"
SITE_DIR_MODE = 0o750
DEFAULT_INDEX_MODE = 0o644
DEFAULT_INDEX_NAME = "index.php"
DEFAULT_INDEX_CONTENT = '<?php\necho "Hello World!";\n'

# Web server identity
WEB_USER = "www-data"
WEB_GROUP = "www-data"

# NGINX
NGINX_SERVICE = "nginx"
NGINX_SITES_AVAILABLE = Path("/etc/nginx/sites-available")
NGINX_SITES_ENABLED = Path("/etc/nginx/sites-enabled")
PHP_FPM_SOCKET = "/var/run/php/php8.3-fpm.sock"
DEFAULT_CLIENT_MAX_BODY_SIZE = "256M"
INDEX_FILES = "index.php index.html index.htm default.cshtml default.aspx default.asp"

# FastCGI tuning for the PHP location
FASTCGI_BUFFER_SIZE = "16k"
FASTCGI_BUFFERS = "4 16k"
FASTCGI_TIMEOUT = 600

# Certbot / Let's Encrypt
LETSENCRYPT_DIR = Path("/etc/letsencrypt")
CERTBOT_LOG_PATH = Path("/var/log/letsencrypt/letsencrypt.log")

# Audit / logging
LOG_DIR = Path("/var/log/vhostctl")
AUDIT_JSONL_PATH = LOG_DIR / "audit.jsonl"
AUDIT_DB_PATH = Path("/var/lib/vhostctl/audit.db")
