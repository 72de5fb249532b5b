from reconnect_harness.server import run

run()
