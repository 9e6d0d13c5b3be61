import logging, signal, sys
from fuzzystat.logging_config import setup_logging, resolve_logging_from_env_and_cfg
from fuzzystat.runtime import load_config, build_runtime

log = logging.getLogger("fuzzystat.app")

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    paths = [a for a in argv if not a.startswith("--")]
    cfg = load_config(paths[0] if paths else None)
    setup_logging(*resolve_logging_from_env_and_cfg(cfg))
    app, loop = build_runtime(cfg)

    def handle_sig(sig, frame):
        loop.stop()
    signal.signal(signal.SIGINT, handle_sig); signal.signal(signal.SIGTERM, handle_sig)

    last = {"mode": None}
    def on_decision(d):
        if d.output.mode != last["mode"]:
            last["mode"] = d.output.mode
            log.info("%s | %s | heat=%.0f%% cool=%.0f%%", d.humidity_reasoning, d.reasoning,
                     d.heating_output, d.cooling_output)
    app.add_decision_listener(on_decision)

    log.info("Starting FuzzyStat loop. Ctrl+C to exit.")
    app.start()
    if "--simulate" in argv:
        app.start_simulation()
    try:
        loop.run()
    finally:
        log.info("Shutting down, cancelling timers.")
        app.shutdown()
    return 0

if __name__ == "__main__":
    sys.exit(main())
