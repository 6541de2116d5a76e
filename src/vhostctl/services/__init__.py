"""Service layer: filesystem, rendering, NGINX, certbot and the step pipeline."""
