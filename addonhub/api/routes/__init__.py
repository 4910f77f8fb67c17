"""AddonHub API routers."""
