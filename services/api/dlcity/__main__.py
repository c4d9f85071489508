from dlcity.main import run

run()
