"""vhostctl: provision an NGINX + PHP-FPM virtual host with a Let's Encrypt certificate."""

__version__ = "0.1.0"
