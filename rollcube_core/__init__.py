"""
RollCube core Python package.

Pure game logic for the rolling-die puzzle, kept free of any rendering or
web code so the Flask host, the terminal host and the tests share it.
Modules:
- shuffle.py: Fisher-Yates shuffle and interval draws
- board.py: Board, Coord, CellRole, Highlight
- die.py: Die, Faces, DieState
- directions.py: Direction and the camera remap tables
- controller.py: GameController (session state machine)
- state.py: frozen snapshots handed to renderers
- hint.py: shortest roll sequence to the next target
- config.py / errors.py: GameConfig and package exceptions
"""
