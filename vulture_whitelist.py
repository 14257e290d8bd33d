# Vulture whitelist: names required by framework or protocol signatures
# that vulture reports as unused.
#
# Run vulture with: vulture shared/ api_service/ web_app/ vulture_whitelist.py --min-confidence 80

# Default register_blueprints hook (app)
app  # unused variable

# Signal handler signature (signum, frame)
frame  # unused variable

# WSGI start_response signature (status, headers, exc_info)
exc_info  # unused variable

# Flask route functions are registered through decorators
health  # unused function
ready  # unused function
get_metrics  # unused function
get_status  # unused function
list_users  # unused function
create_user  # unused function
index  # unused function

# Error handlers are registered through @app.errorhandler
handle_service_exception  # unused function
handle_http_exception  # unused function
handle_unexpected_exception  # unused function
