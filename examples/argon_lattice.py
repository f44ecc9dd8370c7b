# examples/argon_lattice.py
from molsim.core import kinetic_energy, total_energy
from molsim.io import synthesize_records
from molsim.recorder import MemoryRecorder
from molsim.universe import Universe

# 27 argon atoms at rest, squeezed to 95% of the LJ minimum spacing
records = synthesize_records(27, element="Ar", spacing=0.95 * 2 ** (1 / 6) * 340.5)
universe = Universe.from_records(records, c_time=2e-15)

recorder = MemoryRecorder()
e0 = total_energy(universe)
universe.simulate(1e-12, recorder)
e1 = total_energy(universe)

print("frames:", len(recorder.frames))
print("kinetic energy:", kinetic_energy(universe.particles), "J")
print("total energy drift:", (e1 - e0) / abs(e0))
corner = recorder.trajectory(26)
print("corner atom |r| (m):", corner[0].position, "->", corner[-1].position)
