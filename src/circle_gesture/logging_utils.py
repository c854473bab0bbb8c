LEVELS = ('debug', 'info', 'warn', 'error')


def enabled(level: str, cfg_level: str = 'info') -> bool:
    return LEVELS.index(level) >= LEVELS.index(cfg_level)


def log(msg: str, level: str = 'info', *, cfg_level: str = 'info') -> None:
    if enabled(level, cfg_level):
        print(f'[{level.upper()}] {msg}', flush=True)
