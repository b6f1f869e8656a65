from pydantic_settings import BaseSettings

from compass.nmea.parser import MAX_SENTENCE_LENGTH


class Settings(BaseSettings):
    # Heading sensor serial line
    serial_port: str = "/dev/ttyUSB0"
    serial_baud: int = 4800
    serial_timeout: float = 1.0

    # Parser
    max_sentence_length: int = MAX_SENTENCE_LENGTH
    require_valid_checksum: bool = False

    # Reset button (negative line = disabled)
    button_gpio_chip: str = "/dev/gpiochip0"
    button_gpio_line: int = 17
    button_debounce_ms: int = 50

    display_width: int = 16
    log_level: str = "INFO"

    model_config = {"env_prefix": "COMPASS_"}

    @property
    def button_enabled(self) -> bool:
        return self.button_gpio_line >= 0
