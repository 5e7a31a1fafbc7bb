from charge_sim import Simulation, Particle

# Opposite charges released from rest; no damping so the energy exchange is visible
sim = Simulation(width=800, height=600, damping=1.0, restitution=1.0)
a = Particle(charge=+1, position=(300.0, 300.0))
b = Particle(charge=-1, position=(500.0, 300.0))
sim.add_particle(a); sim.add_particle(b)

for i in range(120):
    sim.step(1/60)
    if i % 20 == 0:
        s = sim.get_statistics()
        print(f"step {i:3d} sep={b.position[0] - a.position[0]:7.2f} "
              f"KE={s.kinetic_energy:8.3f} PE={s.potential_energy:9.3f} E={s.total_energy:9.3f}")
