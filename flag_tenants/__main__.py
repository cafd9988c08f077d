from flag_tenants.config.dotenv_loader import load_dotenv_files

load_dotenv_files()

from flag_tenants.cli import app

app(prog_name="flag-tenants")
