"""Built-in default configuration document."""

DEFAULT_USER_CONFIG_FILE = "~/.qingcloud/config.yaml"

DEFAULT_CONFIG_FILE_CONTENT = """\
# QingCloud services configuration

qy_access_key_id: 'ACCESS_KEY_ID'
qy_secret_access_key: 'SECRET_ACCESS_KEY'

host: 'api.qingcloud.com'
port: 443
protocol: 'https'
uri: '/iaas'
connection_retries: 3
connection_timeout: 30

# Valid log levels are "debug", "info", "warn", "error", and "fatal".
log_level: 'warn'

zone: 'pek3a'
"""
