# examples/charge_gas.py
import logging

from charge_sim import Simulation
from charge_sim.driver import ManualFrameDriver

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

driver = ManualFrameDriver()
sim = Simulation(width=800, height=600, seed=7, request_frame=driver.request_frame)
sim.initialize(60, {"positive": 0.4, "negative": 0.4, "neutral": 0.2})
sim.start(driver.time)

for second in range(1, 6):
    driver.run(frames=60, frame_time=1/60)
    s = sim.get_statistics()
    print(
        f"t={second}s KE={s.kinetic_energy:10.2f} PE={s.potential_energy:10.2f} "
        f"E={s.total_energy:10.2f} <v>={s.average_speed:7.2f} fps={s.fps}"
    )

sim.pause()
print("pending frames after pause:", driver.advance(1/60), "delivered, then", driver.pending)
