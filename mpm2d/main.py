from mpm2d.parsers import add_configuration, parser
from mpm2d.presets import configuration_list
from mpm2d.logging_config import setup_logging
from mpm2d.simulation import GUI_Simulation

from typing import Optional

import taichi as ti


def main(argv: Optional[list[str]] = None) -> None:
    add_configuration(configuration_list)
    arguments = parser.parse_args(argv)
    setup_logging(verbose=arguments.verbose)

    # Initialize Taichi on the chosen architecture:
    if arguments.arch.lower() == "cpu":
        ti.init(arch=ti.cpu, debug=arguments.debug)
    elif arguments.arch.lower() == "gpu":
        ti.init(arch=ti.gpu, debug=arguments.debug)
    else:
        ti.init(arch=ti.cuda, debug=arguments.debug)

    name = "Material Point Method, Elastic & Fluid"
    print("\n", "#" * 100, sep="")
    print("###", name)
    print("#" * 100)
    print(">>> R        -> [R]eset the simulation.")
    print(">>> SPACE    -> Pause/Unpause the simulation.")
    print(">>> M        -> Switch the [M]odel, particles are kept.")
    print(">>> ARROWS   -> Steer gravity.")
    print()

    simulation = GUI_Simulation(
        configurations=configuration_list,
        initial_configuration=arguments.configuration % len(configuration_list),
        initial_model=arguments.model,
        name=name,
    )
    simulation.run()


if __name__ == "__main__":
    main()
