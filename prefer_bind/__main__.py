from prefer_bind.cli import app

if __name__ == "__main__":
    app(prog_name="prefer-bind")
