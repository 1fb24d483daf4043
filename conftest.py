pytest_plugins = [
    "conf_env",
    "conf_mock",
    "conf_core",
    "conf_utils",
]
