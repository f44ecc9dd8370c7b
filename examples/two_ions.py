# examples/two_ions.py
from molsim.types import Particle
from molsim.universe import Universe

E = 1.602176634e-19

universe = Universe(c_time=1e-15)

# Na+ and Cl- released at rest 1 nm apart; they fall towards each other
na = Particle("Na", mass=22.99 * 1.66053904020e-27, charge=+E, position=(0.0, 0.0, 0.0))
cl = Particle("Cl", mass=35.45 * 1.66053904020e-27, charge=-E, position=(1e-9, 0.0, 0.0))
universe.add_particle(na)
universe.add_particle(cl)

steps = universe.simulate(2e-13)

print("steps:", steps, "t:", universe.time)
print("Na pos", na.position, "v", na.velocity)
print("Cl pos", cl.position, "v", cl.velocity)
