"""WooCommerce store catalog mirror."""
