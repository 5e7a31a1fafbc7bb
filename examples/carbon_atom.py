from charge_sim import Simulation

sim = Simulation(width=800, height=800)
sim.load_atom(6)
sim.set_time_scale(2.0)
sim.start(0.0)

t = 0.0
for _ in range(120):
    t += 1/60
    sim.tick(t)

kinds = {}
for p in sim.get_particles():
    kinds[p.kind] = kinds.get(p.kind, 0) + 1
print("particles:", kinds)
print("stats:", sim.get_statistics().as_dict())
