import importlib

from config import get_settings_module

from src.lesson_payroll.lesson_payroll.main import create_app

app = create_app()

if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    app.run(debug=bool(getattr(settings, "DEBUG", False)))
