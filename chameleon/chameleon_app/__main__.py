from chameleon_app.controller import run

if __name__ == "__main__":
    raise SystemExit(run())
