import threading

from dcmcharset import config
from dcmcharset.decoder import decode_to_utf8
from dcmcharset.errors import UnresolvableCharsetError


def test_settings_thread_safety():
    """Different threads can adjust config settings without conflict"""
    barrier = threading.Barrier(3)
    errors = []
    mode_name = {
        config.IGNORE: "IGNORE",
        config.WARN: "WARN",
        config.RAISE: "RAISE",
    }

    def worker(id, val):
        config.settings.reading_validation_mode = val
        barrier.wait(timeout=2)
        # Record if this thead's setting was not preserved
        if config.settings.reading_validation_mode != val:
            errors.append(
                f"Thread {id} expected {mode_name[val]}, "
                f"got {mode_name[config.settings.reading_validation_mode]}"
            )

    t1 = threading.Thread(target=worker, args=(1, config.IGNORE))
    t2 = threading.Thread(target=worker, args=(2, config.RAISE))
    t3 = threading.Thread(target=worker, args=(3, config.WARN))

    t1.start()
    t2.start()
    t3.start()
    t1.join()
    t2.join()
    t3.join()

    assert not errors, f"Thread safety violations detected: {errors}"


def test_concurrent_decoding():
    """Decoding in parallel with different validation modes"""
    barrier = threading.Barrier(2)
    results = {}
    value = b"AB\x1b-Z\xe9"
    declaration = "\\ISO 2022 IR 100"

    def strict():
        with config.strict_reading():
            barrier.wait(timeout=2)
            try:
                decode_to_utf8(value, declaration)
            except UnresolvableCharsetError:
                results["strict"] = "raised"

    def lenient():
        with config.disable_value_validation():
            barrier.wait(timeout=2)
            results["lenient"] = decode_to_utf8(value, declaration)

    threads = [threading.Thread(target=strict), threading.Thread(target=lenient)]
    for t in threads:
        t.start()

    for t in threads:
        t.join()

    assert {"strict": "raised", "lenient": "AB"} == results
