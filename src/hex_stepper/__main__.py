"""Module entrypoint for `python -m hex_stepper`."""

from hex_stepper.play import play


if __name__ == "__main__":
    play()
